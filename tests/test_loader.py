"""Tests for word list import."""

from __future__ import annotations

import pytest

from t9dict.dictionary_db import Status
from t9dict.exceptions import StoreFailure
from t9dict.loader import DictionaryLoader, read_wordlist
from t9dict.store import FREQUENCY_CEILING


@pytest.fixture
def wordlist(tmp_path):
    path = tmp_path / "en.txt"
    path.write_text(
        "# test list\n"
        "Home\n"
        "home\n"
        "gone\t120\n"
        "good\tabc\n"
        "hood\t0\n"
        "héllo\n"
        "\n",
        encoding="utf-8",
    )
    return path


def test_read_wordlist(wordlist):
    assert read_wordlist(wordlist) == [
        ("Home", 1), ("home", 1), ("gone", 120), ("good", 1), ("hood", 1), ("héllo", 1),
    ]


def test_load_sync(db, english, wordlist):
    result = DictionaryLoader(db).load_sync(english, wordlist)

    assert result.status is Status.OK
    assert result.imported == 4
    assert result.skipped == 2
    assert db.store.get(english.id, "4663", "gone").frequency == 120
    assert db.get_suggestions(english, "4663", 1, 8).result() == ["gone", "home", "good", "hood"]


def test_load_in_small_batches(db, english, wordlist):
    result = DictionaryLoader(db, batch_size=1).load_sync(english, wordlist)
    assert result.status is Status.OK
    assert db.store.count() == 4


def test_load_async(db, english, wordlist):
    received = []
    result = DictionaryLoader(db).load(english, wordlist, callback=received.append).result()
    assert result.imported == 4
    db.get_suggestions(english, "4663", 1, 1).result()
    assert received == [result]


def test_failed_import_leaves_dictionary_untouched(db, english, wordlist):
    db.insert_word(english, "hood").result()

    result = DictionaryLoader(db, batch_size=2).load_sync(english, wordlist)

    assert result.status is Status.CONSTRAINT_VIOLATION
    assert result.imported == 0
    assert db.store.count() == 1
    assert not db.store.in_transaction


def test_missing_file(db, english, tmp_path):
    result = DictionaryLoader(db).load_sync(english, tmp_path / "nope.txt")
    assert result.status is Status.FAILURE
    assert db.store.count() == 0


def test_frequency_capped_at_ceiling(db, english, tmp_path):
    path = tmp_path / "big.txt"
    path.write_text("home\t999999\ngone\t50000\n", encoding="utf-8")

    assert read_wordlist(path) == [("home", FREQUENCY_CEILING), ("gone", FREQUENCY_CEILING)]
    assert DictionaryLoader(db).load_sync(english, path).status is Status.OK
    assert db.store.get(english.id, "4663", "home").frequency == FREQUENCY_CEILING


def test_replace_swaps_the_dictionary(db, english, wordlist):
    db.insert_word(english, "hood").result()
    db.insert_word(english, "inn").result()

    result = DictionaryLoader(db).load_sync(english, wordlist, replace=True)

    assert result.status is Status.OK
    assert db.store.count() == 4
    assert db.store.get(english.id, "466", "inn") is None
    assert db.store.get(english.id, "4663", "hood").frequency == 1


def test_failed_replace_keeps_old_words(db, english, wordlist, monkeypatch):
    db.insert_word(english, "inn").result()

    def broken(words):
        raise StoreFailure("disk on fire")

    monkeypatch.setattr(db.store, "insert_many", broken)
    result = DictionaryLoader(db).load(english, wordlist, replace=True).result()

    assert result.status is Status.FAILURE
    assert db.store.count() == 1
    assert db.store.get(english.id, "466", "inn").frequency == 2
    assert not db.store.in_transaction
