"""Tests for keypad alphabets."""

import pytest

from t9dict.exceptions import InvalidWordException
from t9dict.languages import available_languages, get_language


@pytest.mark.parametrize("code,word,sequence", [
    ("en", "home", "4663"),
    ("en", "What", "9428"),
    ("en", "don't", "36618"),
    ("de", "Größe", "47673"),
    ("fr", "été", "383"),
    ("sv", "hallå", "42552"),
    ("tr", "IŞIK", "4745"),
])
def test_digit_sequence(code, word, sequence):
    assert get_language(code).get_digit_sequence_for_word(word) == sequence


def test_unmappable_word_raises():
    with pytest.raises(InvalidWordException):
        get_language("en").get_digit_sequence_for_word("größe")


def test_is_mappable():
    en = get_language("en")
    assert en.is_mappable("Hello")
    assert not en.is_mappable("hello!")


def test_turkish_lowercase():
    tr = get_language("tr")
    assert tr.to_lowercase("İSTANBUL") == "istanbul"
    assert tr.to_lowercase("IRMAK") == "ırmak"
    assert get_language("en").to_lowercase("IRMAK") == "irmak"


def test_first_letters():
    assert get_language("en").first_letters("4663") == "gmmd"
    assert get_language("en").first_letters("40") == "g?"


def test_lookup_by_code_and_id():
    en = get_language("en")
    assert get_language(1) is en
    assert get_language("1") is en
    assert get_language(" EN ") is en
    assert get_language("xx") is None
    assert get_language(None) is None


def test_ids_are_unique():
    ids = [lang.id for lang in available_languages()]
    assert len(ids) == len(set(ids))
