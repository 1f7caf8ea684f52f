# menudoc/locale_strings.py
"""
Language-dependent strings for parsed menus.

The language tag never changes how a PDF is parsed; it only picks the
placeholder description, the sentinel record and the sample menu.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from .menu_types import ANTIPASTI, PRIMI, SECONDI, DishRecord, MenuDocument, empty_menu

SUPPORTED_LANGUAGES: Tuple[str, ...] = ("it", "en")


class UnsupportedLanguageError(ValueError):
    """Language tag outside SUPPORTED_LANGUAGES."""


def normalize_language(language: str) -> str:
    lang = (language or "").strip().lower()
    if lang not in SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(
            f"Unsupported language {language!r}; expected one of {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return lang


# ── Placeholders ─────────────────────────────────────

_DEFAULT_DESCRIPTION: Dict[str, str] = {
    "it": "Delizioso piatto del nostro menu",
    "en": "Delicious dish from our menu",
}

_FALLBACK_DESCRIPTION: Dict[str, str] = {
    "it": "Piatto del nostro menu",
    "en": "Dish from our menu",
}

_SENTINEL: Dict[str, Tuple[str, str]] = {
    "it": (
        "Menu non elaborabile",
        "Il PDF potrebbe avere un formato non supportato. Contatta l'amministratore.",
    ),
    "en": (
        "Menu not processable",
        "The PDF might have an unsupported format. Contact the administrator.",
    ),
}

SENTINEL_PRICE = "€0"


def _pick(table: Dict[str, Any], language: str) -> Any:
    # Parsing must never fail on a language tag; unknown tags read as English.
    lang = (language or "").strip().lower()
    return table.get(lang, table["en"])


def default_description(language: str) -> str:
    """Description used by the primary pass when no description line is found."""
    return _pick(_DEFAULT_DESCRIPTION, language)


def fallback_description(language: str) -> str:
    """Description used for every dish found by the fallback pass."""
    return _pick(_FALLBACK_DESCRIPTION, language)


def sentinel_menu(language: str) -> MenuDocument:
    """The visible "menu could not be processed" document."""
    name, description = _pick(_SENTINEL, language)
    menu = empty_menu()
    menu[ANTIPASTI].append(
        DishRecord(name=name, description=description, price=SENTINEL_PRICE, section_hint="sentinel")
    )
    return menu


# ── Sample menu (served until a PDF has been uploaded) ──

_SAMPLE: Dict[str, Dict[str, Tuple[str, str, str]]] = {
    "it": {
        ANTIPASTI: ("Insalata di Mare", "Polpo, seppie, gamberi e cozze con verdure fresche", "€14.00"),
        PRIMI: ("Spaghetti ai Frutti di Mare", "Un classico con vongole, cozze, gamberi e calamari", "€18.00"),
        SECONDI: ("Grigliata Mista di Pesce", "Pesce spada, gamberoni, seppie e scampi alla griglia", "€25.00"),
    },
    "en": {
        ANTIPASTI: ("Sea Salad", "Octopus, squid, shrimp and mussels with fresh vegetables", "€14.00"),
        PRIMI: ("Seafood Spaghetti", "A classic with clams, mussels, shrimp and squid", "€18.00"),
        SECONDI: ("Mixed Grilled Fish", "Swordfish, prawns, squid and scampi grilled", "€25.00"),
    },
}


def sample_menu(language: str) -> MenuDocument:
    menu = empty_menu()
    for cat, (name, description, price) in _pick(_SAMPLE, language).items():
        menu[cat].append(DishRecord(name=name, description=description, price=price))
    return menu
