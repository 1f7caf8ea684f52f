# menudoc/menu_types.py
"""
Menu document types shared by the parsers, the extraction facade, storage and
the portal API.

Shape of a MenuDocument (always exactly these three keys, in this order):

{
  "antipasti": [DishRecord, ...],
  "primi":     [DishRecord, ...],
  "secondi":   [DishRecord, ...],
}

Order inside a category is display order. Serialized form uses plain dicts
({"name", "description", "price"}) so it can go straight into JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


# ── Categories ───────────────────────────────────────

ANTIPASTI = "antipasti"
PRIMI = "primi"
SECONDI = "secondi"

CATEGORIES: Tuple[str, ...] = (ANTIPASTI, PRIMI, SECONDI)


# ── Records ──────────────────────────────────────────

@dataclass
class DishRecord:
    """One parsed menu entry."""
    name: str
    description: str = ""
    price: str = ""
    # Where the parser got its category from ("header", "keyword", ...).
    # Debug only; never serialized.
    section_hint: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
        }


MenuDocument = Dict[str, List[DishRecord]]


# Outcome kinds, best to worst.
STRUCTURED = "structured"
UNSTRUCTURED = "unstructured"
UNPROCESSABLE = "unprocessable"


@dataclass
class ParseOutcome:
    """
    Which extraction tier produced the menu.

    - structured:    header-driven primary pass found dishes
    - unstructured:  separator/keyword fallback pass found dishes
    - unprocessable: both failed; menu is the sentinel record
    """
    kind: str
    menu: MenuDocument
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.kind != UNPROCESSABLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "reason": self.reason,
            "counts": dish_counts(self.menu),
            "menu": menu_to_dict(self.menu),
        }


# ── Helpers ──────────────────────────────────────────

def empty_menu() -> MenuDocument:
    return {cat: [] for cat in CATEGORIES}


def is_menu_empty(menu: MenuDocument) -> bool:
    return all(not menu.get(cat) for cat in CATEGORIES)


def dish_counts(menu: MenuDocument) -> Dict[str, int]:
    return {cat: len(menu.get(cat) or []) for cat in CATEGORIES}


def menu_to_dict(menu: MenuDocument) -> Dict[str, List[Dict[str, str]]]:
    """Serialize to the stored/JSON shape (category order preserved)."""
    return {cat: [d.to_dict() for d in menu.get(cat) or []] for cat in CATEGORIES}


def menu_from_dict(data: Dict[str, Any]) -> MenuDocument:
    """
    Rebuild a MenuDocument from its stored shape.

    Unknown keys are ignored and missing categories come back empty, so a
    document written by an older version still loads.
    """
    menu = empty_menu()
    for cat in CATEGORIES:
        for it in (data or {}).get(cat) or []:
            if not isinstance(it, dict):
                continue
            menu[cat].append(
                DishRecord(
                    name=str(it.get("name") or ""),
                    description=str(it.get("description") or ""),
                    price=str(it.get("price") or ""),
                )
            )
    return menu
