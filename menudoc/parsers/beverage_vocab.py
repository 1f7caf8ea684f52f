# menudoc/parsers/beverage_vocab.py
"""
Beverage Vocabulary

Single source of truth for drink/wine detection. Used by the section rule
table (a wine line is never a header), the primary line grammar and the
fallback fragment grammar (a drink is never a dish).

is_beverage() is a plain OR of independent rules:
  1. a beverage / grape / appellation / winery word appears in the line
  2. a bottle/glass volume token + a designation (DOC, DOCG, IGT, ...) + a digit
  3. a currency token + a volume token ("Acqua 0,75 lt 3€", "calice 25cl 6€")

The word lists are tuned on Apulian seafood-restaurant menus. They are data,
not logic: extend them freely.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, List, Set

from .price_parser import has_currency

# ── Vocabulary ───────────────────────────────────────

BEVERAGE_WORDS: Set[str] = {
    # Drink categories (it / en)
    "vino", "vini", "wine", "wines", "birra", "birre", "beer", "beers",
    "acqua", "water", "bibita", "bibite", "soft drink", "soft drinks",
    "soda", "cola", "coca cola", "aranciata", "chinotto", "gazzosa",
    "succo", "succhi", "juice", "cocktail", "cocktails", "aperitivo",
    "spritz", "bollicine", "spumante", "spumanti", "prosecco", "champagne",
    "franciacorta", "calice", "calici", "bicchiere", "glass", "bottiglia",
    "bottle", "caraffa", "carafe", "amaro", "amari", "liquore", "liquori",
    "digestivo", "digestivi", "grappa", "limoncello", "caffe", "coffee",
    "espresso", "cappuccino", "bevande", "drinks", "rosato", "rose",
    "vini bianchi", "vini rossi", "vino bianco", "vino rosso",
    "white wine", "red wine", "sparkling", "brut", "extra dry",
    # Grape varietals
    "vermentino", "chardonnay", "falanghina", "fiano", "greco di tufo",
    "primitivo", "negroamaro", "nero di troia", "aglianico", "sangiovese",
    "montepulciano", "nebbiolo", "barbera", "dolcetto", "lambrusco",
    "moscato", "trebbiano", "bombino", "susumaniello", "malvasia",
    "verdicchio", "pecorino abruzzo", "passerina", "pinot", "pinot grigio",
    "pinot nero", "sauvignon", "merlot", "cabernet", "syrah", "riesling",
    "gewurztraminer", "muller thurgau", "ribolla", "vernaccia", "grillo",
    "catarratto", "nero d'avola", "zibibbo", "glera", "cannonau",
    "minutolo", "verdeca", "bianco d'alessano",
    # Appellations
    "barolo", "barbaresco", "brunello", "chianti", "amarone",
    "valpolicella", "soave", "lugana", "bolgheri", "gavi",
    "castel del monte", "salice salentino", "gioia del colle",
    "locorotondo", "alto adige", "collio", "langhe", "montalcino",
    # Winery-style nouns
    "cantina", "cantine", "tenuta", "tenute", "podere", "azienda agricola",
    "vigneto", "vigneti", "winery", "chateau",
}

# Dish phrases that mention a drink but are food.
CULINARY_PHRASES: List[str] = [
    "acqua pazza", "all'acqua pazza", "acquapazza",
    "al vino bianco", "al vino rosso", "al vino", "sfumato al vino",
    "nel vino", "alla birra", "in birra", "al prosecco", "allo champagne",
    "al primitivo", "al negroamaro", "al limoncello", "al caffe",
    "al succo", "succo di limone", "cioccolato amaro",
]

VOLUME_TOKENS: Set[str] = {"bt", "cl", "lt", "ml"}
DESIGNATION_TOKENS: Set[str] = {"doc", "docg", "dop", "igt", "igp"}


# ── Normalization ────────────────────────────────────

def fold(text: str) -> str:
    """Lower-case and strip accents ("Rosé" -> "rose", "Müller" -> "muller")."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.lower().replace("’", "'")


def _alternation(words: Iterable[str]) -> str:
    # Longest first so "vino bianco" wins over "vino".
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


_WORD_RE = re.compile(r"(?<![a-z])(?:" + _alternation(BEVERAGE_WORDS) + r")(?![a-z])")
_CULINARY_RE = re.compile(r"(?<![a-z])(?:" + _alternation(CULINARY_PHRASES) + r")(?![a-z])")

# "1bt", "0,75 lt", "25cl", "bt."; digits may be glued to the unit
_VOLUME_RE = re.compile(r"(?<![a-z])\d*[.,]?\d*\s*(?:" + _alternation(VOLUME_TOKENS) + r")(?![a-z])")
_DESIGNATION_RE = re.compile(r"(?<![a-z])(?:" + _alternation(DESIGNATION_TOKENS) + r")(?![a-z])")
_DIGIT_RE = re.compile(r"\d")


def _strip_culinary(text: str) -> str:
    return _CULINARY_RE.sub(" ", text)


# ── Rules ────────────────────────────────────────────

def has_beverage_word(text: str) -> bool:
    return bool(_WORD_RE.search(_strip_culinary(fold(text))))


def has_volume_token(text: str) -> bool:
    return bool(_VOLUME_RE.search(fold(text)))


def has_designation(text: str) -> bool:
    return bool(_DESIGNATION_RE.search(fold(text)))


def is_beverage(line: str) -> bool:
    """
    Binary drink/wine predicate.

    >>> is_beverage("Vermentino Bolgheri DOC 1bt 25,00€")
    True
    >>> is_beverage("Orata all'acqua pazza 18€")
    False
    """
    if not line:
        return False
    if has_beverage_word(line):
        return True
    volume = has_volume_token(line)
    if volume and has_designation(line) and _DIGIT_RE.search(line):
        return True
    if volume and has_currency(line):
        return True
    return False
