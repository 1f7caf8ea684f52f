# menudoc/contracts.py
from __future__ import annotations

import re
from typing import Any, Dict, Tuple

from .menu_types import CATEGORIES

MENU_DISH_KEYS = ("name", "description", "price")

_PRICE_RE = re.compile(r"^€\d+(?:\.\d{2})?$")


def validate_menu_payload(payload: Dict[str, Any]) -> Tuple[bool, str]:
    """Check a serialized MenuDocument before it is stored or served."""
    if not isinstance(payload, dict):
        return False, "menu must be an object"

    keys = set(payload.keys())
    missing = [c for c in CATEGORIES if c not in keys]
    if missing:
        return False, f"missing categories: {', '.join(missing)}"
    extra = sorted(keys - set(CATEGORIES))
    if extra:
        return False, f"unknown categories: {', '.join(extra)}"

    for cat in CATEGORIES:
        dishes = payload[cat]
        if not isinstance(dishes, list):
            return False, f"{cat} must be a list"
        for i, it in enumerate(dishes):
            if not isinstance(it, dict):
                return False, f"{cat}[{i}] must be an object"
            for k in MENU_DISH_KEYS:
                if not isinstance(it.get(k, None), str):
                    return False, f"{cat}[{i}].{k} must be a string"
            if not it["name"].strip():
                return False, f"{cat}[{i}].name must not be empty"
            if not _PRICE_RE.match(it["price"]):
                return False, f"{cat}[{i}].price must look like €12.50"

    return True, ""
