"""
Category inference for header-less dishes.

Covers:
  - keyword scores weight the name over the description
  - tie break prefers primi, then secondi
  - context scan limited to the previous CONTEXT_WINDOW fragments
  - rotation cycles antipasti -> primi -> secondi
  - infer_category always answers with a real category and a source
"""

from __future__ import annotations

import pytest

from menudoc.category_infer import (
    CONTEXT_WINDOW,
    guess_by_context,
    guess_by_keyword,
    guess_by_rotation,
    infer_category,
    keyword_scores,
)
from menudoc.menu_types import CATEGORIES


class TestKeyword:
    def test_scores(self):
        scores = keyword_scores("Spaghetti alle cozze", "con pomodorini")
        assert scores == {"antipasti": 2, "primi": 2, "secondi": 0}

    def test_tie_prefers_primi(self):
        assert guess_by_keyword("Spaghetti alle cozze") == "primi"

    def test_name_outweighs_description(self):
        assert guess_by_keyword("Grigliata mista", "con insalata") == "secondi"

    def test_accents_folded(self):
        assert guess_by_keyword("Sauté di cozze") == "antipasti"

    def test_no_keyword(self):
        assert guess_by_keyword("Specialità dello chef") is None


class TestContext:
    FRAGMENTS = ["PRIMI", "uno", "due", "tre", "quattro", "cinque", "Piatto"]

    def test_within_window(self):
        assert guess_by_context(self.FRAGMENTS, CONTEXT_WINDOW) == "primi"

    def test_outside_window(self):
        assert guess_by_context(self.FRAGMENTS, CONTEXT_WINDOW + 1) is None

    def test_nearest_header_wins(self):
        frags = ["ANTIPASTI", "Piatto uno", "SECONDI", "Piatto due"]
        assert guess_by_context(frags, 3) == "secondi"

    def test_start_of_stream(self):
        assert guess_by_context(["Piatto"], 0) is None


class TestRotation:
    @pytest.mark.parametrize("count,expected", [
        (0, "antipasti"), (1, "primi"), (2, "secondi"), (3, "antipasti"), (7, "primi"),
    ])
    def test_cycle(self, count, expected):
        assert guess_by_rotation(count) == expected


class TestInferCategory:
    def test_keyword_source(self):
        guess = infer_category("Risotto alla pescatora")
        assert (guess.category, guess.source) == ("primi", "keyword")

    def test_context_source(self):
        guess = infer_category("Piatto del giorno", fragments=["SECONDI", "Piatto del giorno 12€"], index=1)
        assert (guess.category, guess.source) == ("secondi", "context")

    def test_rotation_source(self):
        guess = infer_category("Piatto del giorno", dish_count=2)
        assert (guess.category, guess.source) == ("secondi", "rotation")

    @pytest.mark.parametrize("name", ["", "xyz", "Piatto del giorno", "Orata al forno"])
    def test_always_a_category(self, name):
        assert infer_category(name).category in CATEGORIES
