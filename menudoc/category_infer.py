# menudoc/category_infer.py
"""
Category inference for dishes found without a section header.

Used by the fallback pass only. Three signals, first one that answers wins:
  1. keyword: dish-type vocabulary in the name (and description)
  2. context: nearest section-header keyword in the previous fragments
  3. rotation: running dish count mod 3, so an unlabeled menu still spreads
     over the three categories

Returns a CategoryGuess with a short human-readable reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence
import re

from .menu_types import ANTIPASTI, CATEGORIES, PRIMI, SECONDI
from .parsers.beverage_vocab import fold
from .parsers.section_rules import match_header


# ------------------------
# Data structures
# ------------------------

@dataclass
class CategoryGuess:
    category: str
    source: str  # "keyword" | "context" | "rotation"
    reason: str = ""


# ------------------------
# Keyword vocabulary
# ------------------------

# Seafood / raw / cold plates -> antipasti; pasta and rice -> primi;
# grilled, fried and whole fish -> secondi.
CATEGORY_KEYWORDS: Dict[str, Sequence[str]] = {
    ANTIPASTI: [
        "antipasto", "crudo", "crudi", "cruda", "crudite", "carpaccio",
        "tartare", "tartar", "ostrica", "ostriche", "ricci", "cozze",
        "tagliere", "bruschetta", "bruschette", "insalata", "insalatina",
        "sauté", "saute", "impepata", "marinate", "marinato", "marinati",
        "alici", "burrata", "polpo", "scampi crudi", "gamberi crudi",
        "fritturina", "caprese", "salad", "raw", "oysters", "mussels",
        "starter",
    ],
    PRIMI: [
        "spaghetti", "spaghettoni", "linguine", "linguina", "tagliolini",
        "tagliatelle", "fettuccine", "pappardelle", "paccheri", "penne",
        "rigatoni", "orecchiette", "cavatelli", "troccoli", "strozzapreti",
        "fusilli", "trofie", "gnocchi", "ravioli", "tortelli", "lasagna",
        "lasagne", "calamarata", "scialatielli", "bucatini", "vermicelli",
        "risotto", "riso", "zuppa", "minestra", "pasta", "fregola",
        "cous cous", "couscous", "rice",
    ],
    SECONDI: [
        "grigliata", "griglia", "grigliato", "grigliati", "alla brace",
        "brace", "arrosto", "arrostito", "fritto", "frittura", "fritti",
        "in crosta", "al forno", "al sale", "all'acqua pazza", "guazzetto",
        "filetto", "trancio", "tagliata", "orata", "spigola", "branzino",
        "pescato", "pesce spada", "tonno", "salmone", "ricciola", "rombo",
        "gamberoni", "scampi", "aragosta", "astice", "seppie", "calamari",
        "grilled", "fried", "whole fish", "catch of the day", "fillet",
        "steak",
    ],
}

# Tie-break order: pasta words are the head noun of a dish name more often
# than the seafood they come with ("Spaghetti alle cozze").
_TIE_ORDER = (PRIMI, SECONDI, ANTIPASTI)

# Number of fragments looked at backwards for a header keyword.
CONTEXT_WINDOW = 5


def _pattern(words: Sequence[str]) -> "re.Pattern[str]":
    alts = "|".join(re.escape(fold(w)) for w in sorted(words, key=len, reverse=True))
    return re.compile(r"(?<![a-z])(?:" + alts + r")(?![a-z])")


_KEYWORD_RES = {cat: _pattern(words) for cat, words in CATEGORY_KEYWORDS.items()}


# ------------------------
# Signals
# ------------------------

def keyword_scores(name: str, description: str = "") -> Dict[str, int]:
    """Name hits count double; description hits count once."""
    name_f = fold(name)
    desc_f = fold(description)
    scores: Dict[str, int] = {}
    for cat in CATEGORIES:
        rx = _KEYWORD_RES[cat]
        scores[cat] = 2 * len(rx.findall(name_f)) + len(rx.findall(desc_f))
    return scores


def guess_by_keyword(name: str, description: str = "") -> Optional[str]:
    scores = keyword_scores(name, description)
    best = max(scores.values())
    if best <= 0:
        return None
    for cat in _TIE_ORDER:
        if scores[cat] == best:
            return cat
    return None


def guess_by_context(fragments: Sequence[str], index: int, window: int = CONTEXT_WINDOW) -> Optional[str]:
    """Nearest header keyword among the `window` fragments before `index`."""
    lo = max(0, index - window)
    for j in range(index - 1, lo - 1, -1):
        section = match_header(fragments[j])
        if section is not None:
            return section
    return None


def guess_by_rotation(dish_count: int) -> str:
    return CATEGORIES[dish_count % len(CATEGORIES)]


# ------------------------
# Core inference
# ------------------------

def infer_category(
    name: str,
    description: str = "",
    fragments: Sequence[str] = (),
    index: int = 0,
    dish_count: int = 0,
) -> CategoryGuess:
    """
    Pick a category for one dish.

    `fragments`/`index` locate the dish in the fallback fragment stream (for
    the context scan); `dish_count` is how many dishes were accepted before
    this one (for the rotation).
    """
    category = guess_by_keyword(name, description)
    if category is not None:
        return CategoryGuess(category, "keyword", "matched dish-type keywords")

    category = guess_by_context(fragments, index)
    if category is not None:
        return CategoryGuess(category, "context", f"header keyword within {CONTEXT_WINDOW} fragments")

    return CategoryGuess(guess_by_rotation(dish_count), "rotation", "no keyword or header signal")
