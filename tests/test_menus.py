"""
Menu storage (sqlite) and payload contracts.

Covers:
  menus:
  - get_menu() serves the sample menu until something is saved
  - save_menu() then load_menu() gives the same document back
  - second save replaces the first (last writer wins)
  - invalid documents rejected with ValueError, nothing written
  - sentinel document is storable
  - list_menus() / delete_menu()
  - unsupported language rejected

  validate_menu_payload():
  - valid document
  - missing / unknown categories
  - wrong types, empty name, malformed price
"""

from __future__ import annotations

import sqlite3
from typing import Optional

import pytest

import menudoc.menus as menus
from menudoc.contracts import validate_menu_payload
from menudoc.locale_strings import UnsupportedLanguageError, sentinel_menu
from menudoc.menu_types import UNPROCESSABLE, DishRecord, empty_menu

# ---------------------------------------------------------------------------
# In-memory DB helpers
# ---------------------------------------------------------------------------
_TEST_CONN: Optional[sqlite3.Connection] = None


def _make_test_db() -> sqlite3.Connection:
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    return conn


@pytest.fixture
def fresh_db(monkeypatch):
    global _TEST_CONN
    _TEST_CONN = _make_test_db()
    monkeypatch.setattr(menus, "db_connect", lambda: _TEST_CONN)
    yield _TEST_CONN
    _TEST_CONN.close()
    _TEST_CONN = None


def _menu() -> dict:
    menu = empty_menu()
    menu["antipasti"].append(DishRecord("Insalata di Mare", "Polpo, gamberi e cozze", "€14.00"))
    menu["primi"].append(DishRecord("Spaghetti ai Frutti di Mare", "Delizioso piatto del nostro menu", "€18.00"))
    return menu


# ===========================================================================
# Storage
# ===========================================================================

class TestMenuStore:
    def test_default_until_saved(self, fresh_db):
        menu, source = menus.get_menu("it")
        assert source == "default"
        assert menu["antipasti"][0].name == "Insalata di Mare"
        assert menus.load_menu("it") is None

    def test_round_trip(self, fresh_db):
        menus.save_menu("it", _menu())
        menu, source = menus.get_menu("it")
        assert source == "stored"
        assert menu == _menu()

    def test_last_writer_wins(self, fresh_db):
        menus.save_menu("it", _menu())
        replacement = empty_menu()
        replacement["secondi"].append(DishRecord("Orata al forno", "Con patate", "€20.00"))
        menus.save_menu("it", replacement)
        assert menus.load_menu("it") == replacement

    def test_languages_independent(self, fresh_db):
        menus.save_menu("it", _menu())
        assert menus.load_menu("en") is None

    def test_invalid_rejected(self, fresh_db):
        bad = empty_menu()
        bad["primi"].append(DishRecord("Spaghetti", "", "18"))
        with pytest.raises(ValueError):
            menus.save_menu("it", bad)
        assert menus.load_menu("it") is None

    def test_sentinel_storable(self, fresh_db):
        menus.save_menu("en", sentinel_menu("en"), outcome=UNPROCESSABLE)
        [row] = menus.list_menus()
        assert row["language"] == "en"
        assert row["outcome"] == UNPROCESSABLE
        assert menus.load_menu("en")["antipasti"][0].price == "€0"

    def test_delete(self, fresh_db):
        menus.save_menu("it", _menu())
        assert menus.delete_menu("it") is True
        assert menus.delete_menu("it") is False
        assert menus.get_menu("it")[1] == "default"

    def test_unsupported_language(self, fresh_db):
        with pytest.raises(UnsupportedLanguageError):
            menus.save_menu("fr", _menu())


# ===========================================================================
# Contracts
# ===========================================================================

def _payload() -> dict:
    return {
        "antipasti": [{"name": "Burrata", "description": "", "price": "€9.00"}],
        "primi": [],
        "secondi": [],
    }


class TestValidateMenuPayload:
    def test_valid(self):
        assert validate_menu_payload(_payload()) == (True, "")

    def test_sentinel_price_valid(self):
        p = _payload()
        p["antipasti"][0]["price"] = "€0"
        assert validate_menu_payload(p)[0] is True

    def test_not_a_dict(self):
        assert validate_menu_payload([])[0] is False

    def test_missing_category(self):
        p = _payload()
        del p["secondi"]
        ok, err = validate_menu_payload(p)
        assert not ok and "secondi" in err

    def test_unknown_category(self):
        p = _payload()
        p["dolci"] = []
        ok, err = validate_menu_payload(p)
        assert not ok and "dolci" in err

    def test_category_not_list(self):
        p = _payload()
        p["primi"] = {}
        assert validate_menu_payload(p) == (False, "primi must be a list")

    def test_non_string_field(self):
        p = _payload()
        p["antipasti"][0]["price"] = 9
        assert validate_menu_payload(p) == (False, "antipasti[0].price must be a string")

    def test_empty_name(self):
        p = _payload()
        p["antipasti"][0]["name"] = "  "
        assert validate_menu_payload(p)[0] is False

    @pytest.mark.parametrize("price", ["9", "9,00€", "€9,00", "EUR 9.00", "€9.5"])
    def test_bad_price(self, price):
        p = _payload()
        p["antipasti"][0]["price"] = price
        assert validate_menu_payload(p)[0] is False
