"""Unit tests for multi-choice answer parsing (oneclick.prompts)."""

from __future__ import annotations

import pytest

from oneclick.prompts import parse_multi_choice

pytestmark = pytest.mark.unit

OPTIONS = ("index", "show", "store", "update", "destroy")


class TestParseMultiChoice:
    def test_names_and_indexes(self):
        assert parse_multi_choice("store, 4,DESTROY", OPTIONS) == (
            ["store", "update", "destroy"],
            [],
        )

    def test_empty_answer(self):
        assert parse_multi_choice("", OPTIONS) == ([], [])
        assert parse_multi_choice(None, OPTIONS) == ([], [])

    def test_duplicates_dropped(self):
        assert parse_multi_choice("show,2,show", OPTIONS) == (["show"], [])

    def test_invalid_tokens_reported(self):
        selected, invalid = parse_multi_choice("index,purge,9", OPTIONS)
        assert selected == ["index"]
        assert invalid == ["purge", "9"]
