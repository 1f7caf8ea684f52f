# menudoc/parsers/menu_grammar.py
"""
Menu Line Grammar: primary (header-driven) pass.

Walks the normalized text lines once, front to back, keeping a single
"current section" state:

  ANTIPASTI                       -> header: section = antipasti
  Insalata di Mare 14,00€         -> dish, price on the line
  Polpo, gamberi e cozze          ->   description (lookahead, up to 3 lines)
  PRIMI                           -> header: section = primi
  Linguine all'astice             -> dish name, price not on this line
  con pomodorini                  ->   description
  22,00 €                         ->   price (dangling lookahead, up to 2 lines)

Lines before the first header are restaurant name / address noise and are
ignored. Drink lines are skipped everywhere. Nothing in here raises on
content: a line that fits no rule is skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..locale_strings import default_description
from ..menu_types import DishRecord, MenuDocument, empty_menu
from .beverage_vocab import is_beverage
from .price_parser import (
    clean_name,
    find_price,
    has_alnum,
    has_currency,
    has_letters,
    is_price_only,
    split_name_and_price,
)
from .section_rules import match_header

log = logging.getLogger(__name__)

DESCRIPTION_LOOKAHEAD = 3
DANGLING_PRICE_LOOKAHEAD = 2
# A name line waiting for its price must be longer than this.
MIN_DANGLING_NAME_CHARS = 8


@dataclass
class ParseState:
    """Per-call scratch state; created for one parse and thrown away."""
    lines: Sequence[str]
    current_section: Optional[str] = None
    index: int = 0
    menu: MenuDocument = field(default_factory=empty_menu)

    def add(self, dish: DishRecord) -> None:
        self.menu[self.current_section].append(dish)


# ── Line predicates ──────────────────────────────────

def _starts_with_digit(line: str) -> bool:
    return bool(line) and line.lstrip()[:1].isdigit()


def _opens_split_dish(lines: Sequence[str], j: int) -> bool:
    """Line j is a bare name whose price sits alone on the next line."""
    if j + 1 >= len(lines):
        return False
    return find_price(lines[j]) is None and is_price_only(lines[j + 1])


def _is_description_line(lines: Sequence[str], j: int) -> bool:
    line = lines[j]
    if not has_alnum(line):
        return False
    if find_price(line) is not None:
        return False
    if match_header(line) is not None:
        return False
    if is_beverage(line):
        return False
    if _starts_with_digit(line):
        return False
    if _opens_split_dish(lines, j):
        return False
    return True


def is_dangling_name_candidate(line: str) -> bool:
    """A line that may be a dish name with its price on a following line."""
    return (
        len(line) > MIN_DANGLING_NAME_CHARS
        and has_letters(line)
        and not is_beverage(line)
        and not _starts_with_digit(line)
        and not has_currency(line)
    )


# ── Branches ─────────────────────────────────────────

def _collect_description(state: ParseState, start: int) -> List[str]:
    parts: List[str] = []
    j = start
    while len(parts) < DESCRIPTION_LOOKAHEAD and j < len(state.lines):
        if not _is_description_line(state.lines, j):
            break
        parts.append(state.lines[j])
        j += 1
    return parts


def _dish_with_price(state: ParseState, language: str) -> None:
    line = state.lines[state.index]
    split = split_name_and_price(line)
    if split is None:
        state.index += 1
        return
    name, price, leftover = split

    parts = [leftover] if leftover else []
    desc_lines = _collect_description(state, state.index + 1)
    parts.extend(desc_lines)
    state.index += 1 + len(desc_lines)

    if not has_letters(name):
        log.debug("price without a name skipped: %r", line)
        return

    state.add(
        DishRecord(
            name=name,
            description=" ".join(parts) or default_description(language),
            price=price,
            section_hint="header",
        )
    )


def _dish_with_dangling_price(state: ParseState, language: str) -> bool:
    """Try to pair a name line with a price found up to 2 lines below."""
    lines = state.lines
    i = state.index
    for offset in range(1, DANGLING_PRICE_LOOKAHEAD + 1):
        j = i + offset
        if j >= len(lines):
            return False
        candidate = lines[j]
        if match_header(candidate) is not None or is_beverage(candidate):
            return False
        match = find_price(candidate)
        if match is None:
            continue
        if has_letters(candidate[:match.start]):
            # "Orata al forno 18€" is a dish of its own, not a dangling price.
            return False

        split = split_name_and_price(candidate, match)
        leftover = ""
        if split is not None:
            # Text sharing the price line reads as the tail of the description.
            leftover = " ".join(p for p in (split[0], split[2]) if has_alnum(p))
        between = [ln for ln in lines[i + 1:j] if has_alnum(ln)]
        parts = between + ([leftover] if leftover else [])

        state.add(
            DishRecord(
                name=clean_name(lines[i]),
                description=" ".join(parts) or default_description(language),
                price=match.price,
                section_hint="header",
            )
        )
        state.index = j + 1
        return True
    return False


# ── Entry point ──────────────────────────────────────

def parse_menu_lines(lines: Sequence[str], language: str = "it") -> MenuDocument:
    """
    Primary pass: header-driven extraction over normalized lines.

    Returns a MenuDocument; categories with no header or no priced dish stay
    empty.
    """
    state = ParseState(lines=list(lines))
    while state.index < len(state.lines):
        line = state.lines[state.index]

        section = match_header(line)
        if section is not None:
            state.current_section = section
            state.index += 1
            continue

        if state.current_section is None or is_beverage(line):
            state.index += 1
            continue

        if find_price(line) is not None:
            _dish_with_price(state, language)
            continue

        if is_dangling_name_candidate(line) and _dish_with_dangling_price(state, language):
            continue

        state.index += 1

    return state.menu
