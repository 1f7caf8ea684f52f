# menudoc/parsers/price_parser.py
"""
Price Parser
Finds euro price expressions in menu text lines and normalizes them to the
stored notation "€<amount>" with a "." separator and two decimals.

Accepted shapes (case-insensitive):
  14,00€   14.00 €   14,00   14 €   14 eur   12,50 euro   € 14   €14,5
A bare integer ("14") is NOT a price on its own; it needs a currency marker
or two decimals. The looser trailing-number variant is only used by the
fallback pass, which decides from context whether to trust it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple
import re

# ── Regexes ──────────────────────────────────────────

_CURRENCY = r"(?:€|\beuro\b|\beur\b)"

# amount + optional currency, amount + required currency, currency + amount
PRICE_RE = re.compile(
    r"""
    (?<![\d.,])
    (?:
        (?P<a_int>\d{1,4})[.,](?P<a_dec>\d{2})(?![\d.,]?\d)      # 14,00 / 14.00
        (?:\s*(?:€|euro\b|eur\b))?
      |
        (?P<b_int>\d{1,4})(?:[.,](?P<b_dec>\d))?\s*(?:€|euro\b|eur\b)  # 14€ / 14,5 eur
    )
    |
    €\s*(?P<c_int>\d{1,4})(?:[.,](?P<c_dec>\d{1,2}))?(?![\d])     # € 14 / €14,50
    """,
    re.IGNORECASE | re.VERBOSE,
)

CURRENCY_RE = re.compile(_CURRENCY, re.IGNORECASE)

# Bare number at end of a fragment, no currency ("Frittura di paranza 16")
_TRAILING_NUMBER_RE = re.compile(
    r"(?<![\d.,])(?P<int>\d{1,3})(?:[.,](?P<dec>\d{1,2}))?\s*$"
)

# Characters left between a dish name and its price (dot leaders, dashes, ...)
_NAME_TRAIL = " \t.·…:-–—_|/"


@dataclass
class PriceMatch:
    start: int
    end: int
    amount: Decimal
    raw: str

    @property
    def price(self) -> str:
        return format_price(self.amount)


def _amount(int_part: str, dec_part: Optional[str]) -> Decimal:
    dec = (dec_part or "0").ljust(2, "0")[:2]
    return Decimal(f"{int(int_part)}.{dec}")


def format_price(amount: Decimal) -> str:
    """
    >>> format_price(Decimal("14"))
    '€14.00'
    >>> format_price(Decimal("12.5"))
    '€12.50'
    """
    return f"€{amount.quantize(Decimal('0.01'))}"


# ── Detection ────────────────────────────────────────

def find_price(text: str) -> Optional[PriceMatch]:
    """Return the first price expression in *text*, or None."""
    if not text:
        return None
    m = PRICE_RE.search(text)
    if not m:
        return None
    if m.group("a_int") is not None:
        amount = _amount(m.group("a_int"), m.group("a_dec"))
    elif m.group("b_int") is not None:
        amount = _amount(m.group("b_int"), m.group("b_dec"))
    else:
        amount = _amount(m.group("c_int"), m.group("c_dec"))
    return PriceMatch(start=m.start(), end=m.end(), amount=amount, raw=m.group(0))


def has_price(text: str) -> bool:
    return find_price(text) is not None


def has_currency(text: str) -> bool:
    return bool(CURRENCY_RE.search(text or ""))


def is_price_only(text: str) -> bool:
    """True when the line is nothing but a price (e.g. '14,00 €')."""
    m = find_price(text)
    if m is None:
        return False
    rest = (text[:m.start] + text[m.end:]).strip(_NAME_TRAIL)
    return not rest


def normalize_price(text: str) -> Optional[str]:
    """
    >>> normalize_price("12,50€")
    '€12.50'
    >>> normalize_price("12.50 eur")
    '€12.50'
    >>> normalize_price("pane e coperto") is None
    True
    """
    m = find_price(text)
    return m.price if m else None


def find_trailing_number(text: str) -> Optional[PriceMatch]:
    """Loose variant: a bare number closing the fragment, no currency token."""
    if not text:
        return None
    m = _TRAILING_NUMBER_RE.search(text.rstrip())
    if not m:
        return None
    amount = _amount(m.group("int"), m.group("dec"))
    if amount <= 0:
        return None
    return PriceMatch(start=m.start(), end=m.end(), amount=amount, raw=m.group(0))


# ── Name / price split ───────────────────────────────

_LETTER_RE = re.compile(r"[^\W\d_]")
_ALNUM_RE = re.compile(r"[^\W_]")


def has_letters(text: str) -> bool:
    """A dish name needs at least one letter; dot leaders and stray digits are not names."""
    return bool(_LETTER_RE.search(text or ""))


def has_alnum(text: str) -> bool:
    """
    >>> has_alnum("..........")
    False
    """
    return bool(_ALNUM_RE.search(text or ""))


def clean_name(text: str) -> str:
    """Trim whitespace, dot leaders and separator punctuation around a name."""
    return re.sub(r"\s+", " ", (text or "")).strip(_NAME_TRAIL + " ")


def split_name_and_price(line: str, match: Optional[PriceMatch] = None) -> Optional[Tuple[str, str, str]]:
    """
    Split a priced line into (name, price, leftover).

    The name is the text before the price; when the price opens the line the
    text after it is the name instead. `leftover` is any text after the price
    that did not become the name.

    >>> split_name_and_price("Insalata di Mare 14,00€")
    ('Insalata di Mare', '€14.00', '')
    """
    m = match or find_price(line)
    if m is None:
        return None
    before = clean_name(line[:m.start])
    after = clean_name(line[m.end:])
    if before:
        return before, m.price, after
    return after, m.price, ""
