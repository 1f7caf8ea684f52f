# menudoc/parsers/fallback_grammar.py
"""
Fallback fragment grammar: secondary pass.

Runs only when the header-driven pass found no dish at all (irregular or
flattened PDFs). Works on the original text rather than on lines:

  1. split on newlines and on generic separators (bullets, asterisks,
     spaced dashes) into fragments
  2. pick a price per fragment: strict price first; a bare trailing number
     only when the neighbourhood shows prices are written with a currency
     or the fragment reads like a wine/volume line
  3. drop drinks
  4. classify each dish (keyword -> nearby header -> rotation)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..category_infer import infer_category
from ..locale_strings import fallback_description
from ..menu_types import DishRecord, MenuDocument, empty_menu
from .beverage_vocab import has_designation, has_volume_token, is_beverage
from .price_parser import (
    PriceMatch,
    clean_name,
    find_price,
    find_trailing_number,
    has_alnum,
    has_currency,
    has_letters,
    is_price_only,
    split_name_and_price,
)
from .section_rules import match_header

log = logging.getLogger(__name__)

MIN_FRAGMENT_CHARS = 5

# Bullets, asterisks, pipes, and dashes standing between spaces or at a line
# start; hyphens inside words ("cacio-e-pepe") are kept.
_SEPARATOR_RE = re.compile(r"[•·●▪■◦*|]+|(?:^|\s)[-–—]+(?=\s|$)")


@dataclass
class Candidate:
    name: str
    price: str
    index: int  # fragment index, for the context scan
    loose: bool = False


def split_fragments(text: Optional[str]) -> List[str]:
    """
    >>> split_fragments("• Insalata di mare 14€ • Polpo arrosto - 16€")
    ['Insalata di mare 14€', 'Polpo arrosto', '16€']
    """
    out: List[str] = []
    for raw_line in (text or "").splitlines():
        for piece in _SEPARATOR_RE.split(raw_line):
            frag = re.sub(r"\s+", " ", piece).strip()
            if not has_alnum(frag):
                continue
            if len(frag) < MIN_FRAGMENT_CHARS and not is_price_only(frag):
                continue
            out.append(frag)
    return out


def _loose_price_allowed(fragments: Sequence[str], i: int) -> bool:
    frag = fragments[i]
    if has_volume_token(frag) or has_designation(frag):
        return True
    nxt = fragments[i + 1] if i + 1 < len(fragments) else ""
    prev = fragments[i - 1] if i > 0 else ""
    return has_currency(nxt) or has_currency(prev)


def _price_for(fragments: Sequence[str], i: int) -> Optional[PriceMatch]:
    frag = fragments[i]
    match = find_price(frag)
    if match is not None:
        return match
    if _loose_price_allowed(fragments, i):
        return find_trailing_number(frag)
    return None


def extract_candidates(fragments: Sequence[str]) -> List[Candidate]:
    out: List[Candidate] = []
    i = 0
    n = len(fragments)
    while i < n:
        frag = fragments[i]

        strict = find_price(frag)

        # Name and price split across two fragments ("Polpo arrosto - 16€")
        if (
            strict is None
            and i + 1 < n
            and is_price_only(fragments[i + 1])
            and has_letters(frag)
            and match_header(frag) is None
        ):
            if not is_beverage(f"{frag} {fragments[i + 1]}"):
                price = find_price(fragments[i + 1])
                out.append(Candidate(clean_name(frag), price.price, i))
            i += 2
            continue

        match = strict or _price_for(fragments, i)
        if match is None or is_beverage(frag):
            i += 1
            continue

        split = split_name_and_price(frag, match)
        name = split[0] if split else ""
        if has_letters(name):
            out.append(Candidate(name, match.price, i, loose=strict is None))
        i += 1
    return out


def parse_fallback_text(text: Optional[str], language: str = "it") -> MenuDocument:
    """Secondary pass over the raw text; categories assigned by inference."""
    fragments = split_fragments(text)
    menu = empty_menu()
    dish_count = 0
    for cand in extract_candidates(fragments):
        guess = infer_category(
            cand.name,
            fragments=fragments,
            index=cand.index,
            dish_count=dish_count,
        )
        menu[guess.category].append(
            DishRecord(
                name=cand.name,
                description=fallback_description(language),
                price=cand.price,
                section_hint=guess.source,
            )
        )
        dish_count += 1
    log.info("Fallback pass: %d fragments, %d dishes", len(fragments), dish_count)
    return menu
