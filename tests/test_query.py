"""Tests for the two-phase suggestion query."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from t9dict.query import suggest
from t9dict.store import Word, WordStore


def test_exact_matches_ranked_by_frequency(store):
    store.insert_many([Word(1, "20", "a", 5), Word(1, "20", "b", 9)])
    assert suggest(store, 1, "20", 1, 2) == ["b", "a"]


def test_exact_phase_respects_max_words(store):
    store.insert_many([Word(1, "20", w, f) for w, f in (("a", 5), ("b", 9), ("c", 7))])
    assert suggest(store, 1, "20", 1, 2) == ["b", "c"]


def test_fuzzy_fallback_fills_up_to_min_words(store):
    store.insert_many([Word(1, "20", "a", 1), Word(1, "204", "ad", 1)])
    assert suggest(store, 1, "20", 2, 5) == ["a", "ad"]


def test_fuzzy_results_ranked_by_frequency(store):
    store.insert_many([
        Word(1, "765", "pol", 1),
        Word(1, "7655", "roll", 4),
        Word(1, "765537", "roller", 2),
        Word(1, "7655464", "rolling", 3),
    ])
    assert suggest(store, 1, "765", 4, 8) == ["pol", "roll", "rolling", "roller"]
    assert suggest(store, 1, "765", 2, 8) == ["pol", "roll"]


def test_no_fuzzy_fallback_for_single_digit(store):
    store.insert_many([Word(1, "20", "a", 1), Word(1, "204", "ad", 1)])
    assert suggest(store, 1, "2", 2, 5) == []


def test_no_fuzzy_when_exact_is_enough(store):
    store.insert_many([Word(1, "20", "a", 1), Word(1, "20", "b", 1), Word(1, "204", "ad", 9)])
    assert suggest(store, 1, "20", 2, 5) == ["a", "b"]


def test_other_language_ignored(store):
    store.insert_many([Word(2, "20", "a", 1), Word(2, "204", "ad", 1)])
    assert suggest(store, 1, "20", 2, 5) == []


def test_result_never_exceeds_max_words(store):
    store.insert_many([Word(1, "20", "a", 1)] + [Word(1, "20" + str(i), f"x{i}", 1) for i in range(10)])
    result = suggest(store, 1, "20", 4, 4)
    assert len(result) == 4
    assert result[0] == "a"


@pytest.mark.parametrize("min_words,max_words,expected", [
    (-3, -5, []),
    (3, 1, ["b", "c", "a"]),
    (0, 2, ["b", "c"]),
])
def test_limits_are_clamped(store, min_words, max_words, expected):
    store.insert_many([Word(1, "20", w, f) for w, f in (("a", 5), ("b", 9), ("c", 7))])
    assert suggest(store, 1, "20", min_words, max_words) == expected


def test_empty_sequence_does_not_touch_storage(caplog):
    store = MagicMock(spec=WordStore)
    with caplog.at_level(logging.WARNING, logger="t9dict.query"):
        assert suggest(store, 1, "", 1, 5) == []
    assert not store.get_many.called
    assert "empty sequence" in caplog.text


def test_missing_language_does_not_touch_storage(caplog):
    store = MagicMock(spec=WordStore)
    with caplog.at_level(logging.WARNING, logger="t9dict.query"):
        assert suggest(store, None, "20", 1, 5) == []
    assert not store.get_many.called
    assert not store.get_fuzzy.called
    assert "without a language" in caplog.text
