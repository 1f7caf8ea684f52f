# menudoc/parsers/section_rules.py
"""
Section header rules.

A header line switches the "current category" of the primary pass. Matching
is done on a compact key: whitespace removed, lower-cased, accents folded
("PRIMI  PIATTI" -> "primipiatti"). A category keyword must open the key or
one of the line's words.

HEADER_RULES is evaluated top to bottom and the first rule that fires decides:
either a category or REJECT (the line is not a header). Exclusions are rules
like any other, so each one can be tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import re

from ..menu_types import ANTIPASTI, PRIMI, SECONDI
from .beverage_vocab import fold, has_volume_token, is_beverage
from .price_parser import has_price

REJECT = "reject"

# Headers are short; anything longer is a dish or prose line.
MAX_HEADER_CHARS = 40

_WS_RE = re.compile(r"\s+")


def header_key(line: str) -> str:
    """
    >>> header_key("  Primi  Piatti ")
    'primipiatti'
    """
    return _WS_RE.sub("", fold(line))


@dataclass(frozen=True)
class HeaderRule:
    name: str
    test: Callable[[str, str], bool]  # (raw line, compact key) -> fired?
    outcome: str                      # category or REJECT


def _word_start(*needles: str) -> Callable[[str, str], bool]:
    # Needles must open a word ("I nostri Primi") or the whole compact key
    # ("P R I M I"); "primavera" inside a description is not a header.
    rx = re.compile(r"(?<![a-z])(?:" + "|".join(re.escape(n) for n in needles) + r")")
    return lambda line, key: key.startswith(needles) or bool(rx.search(fold(line)))


def _word_start_without_volume(*needles: str) -> Callable[[str, str], bool]:
    # "bt"/"cl" tokens only show up in wine lists ("Primo 75cl").
    starts = _word_start(*needles)
    return lambda line, key: starts(line, key) and not has_volume_token(line)


HEADER_RULES: List[HeaderRule] = [
    HeaderRule("has_price", lambda line, _key: has_price(line), REJECT),
    HeaderRule("beverage", lambda line, _key: is_beverage(line), REJECT),
    HeaderRule("too_long", lambda _line, key: len(key) > MAX_HEADER_CHARS, REJECT),
    HeaderRule("antipasti", _word_start("antipast", "appetizer", "starter"), ANTIPASTI),
    HeaderRule("primi", _word_start_without_volume("primi", "primo", "pasta", "first"), PRIMI),
    HeaderRule("secondi", _word_start_without_volume("second", "main"), SECONDI),
]


def explain_header(line: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (outcome, rule name) for *line*; (None, None) when nothing fired."""
    if not line or not line.strip():
        return None, None
    key = header_key(line)
    for rule in HEADER_RULES:
        if rule.test(line, key):
            return rule.outcome, rule.name
    return None, None


def match_header(line: str) -> Optional[str]:
    """Category named by a header line, or None when the line is not a header."""
    outcome, _rule = explain_header(line)
    if outcome is None or outcome == REJECT:
        return None
    return outcome
