"""
t9dict.languages
================
Keypad alphabets and the two language collaborators the dictionary needs:
the digit encoding of a word and locale-aware lowercasing.

Only a handful of reference languages ship here. Extend ``LANGUAGES`` to add
more; the numeric ``id`` is what gets stored, so never reuse one.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import InvalidWordException

# ─── Keypad maps ──────────────────────────────────────────────────────────────

# In-word punctuation lives on "1", like on a phone keypad.
_PUNCTUATION = "'-"

_LATIN: dict[str, str] = {
    "1": _PUNCTUATION,
    "2": "abc",
    "3": "def",
    "4": "ghi",
    "5": "jkl",
    "6": "mno",
    "7": "pqrs",
    "8": "tuv",
    "9": "wxyz",
}


def _extend(base: dict[str, str], extra: dict[str, str]) -> dict[str, str]:
    """Return a copy of ``base`` with ``extra`` characters appended per digit."""
    merged = dict(base)
    for digit, chars in extra.items():
        merged[digit] = merged.get(digit, "") + chars
    return merged


# ─── Language ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Language:
    """
    A keypad alphabet.

    ``letters`` maps each digit to the characters printed on that key, in
    the order a multi-tap keyboard cycles through them.
    """

    id: int
    code: str
    name: str
    locale: str
    letters: dict[str, str]
    _char_to_digit: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        mapping: dict[str, str] = {}
        for digit, chars in self.letters.items():
            for ch in chars:
                mapping[ch] = digit
        # frozen dataclass: bypass __setattr__ for the derived lookup table
        object.__setattr__(self, "_char_to_digit", mapping)

    def __hash__(self) -> int:
        return hash(self.id)

    def to_lowercase(self, word: str) -> str:
        if self.locale.startswith("tr"):
            word = word.replace("I", "ı").replace("İ", "i")
        return word.lower()

    def get_digit_sequence_for_word(self, word: str) -> str:
        """
        Convert a word to its digit sequence.

        Raises :class:`InvalidWordException` if any character is not on the
        keypad of this language.
        """
        digits: list[str] = []
        for ch in self.to_lowercase(word):
            digit = self._char_to_digit.get(ch)
            if digit is None:
                raise InvalidWordException(
                    f"Character '{ch}' of word '{word}' is not part of the {self.name} alphabet."
                )
            digits.append(digit)
        return "".join(digits)

    def is_mappable(self, word: str) -> bool:
        return all(ch in self._char_to_digit for ch in self.to_lowercase(word))

    def first_letters(self, sequence: str) -> str:
        """Spell a sequence with the first letter of every key; ``?`` for unknown keys."""
        return "".join(self.letters.get(d, "?")[:1] or "?" for d in sequence)


LANGUAGES: tuple[Language, ...] = (
    Language(1, "en", "English", "en_US", dict(_LATIN)),
    Language(2, "de", "Deutsch", "de_DE", _extend(_LATIN, {
        "2": "ä", "6": "ö", "7": "ß", "8": "ü",
    })),
    Language(3, "fr", "Français", "fr_FR", _extend(_LATIN, {
        "2": "àâæç", "3": "éèêë", "4": "îï", "6": "ôœ", "8": "ùûü", "9": "ÿ",
    })),
    Language(4, "sv", "Svenska", "sv_SE", _extend(_LATIN, {
        "2": "åä", "3": "é", "6": "ö",
    })),
    Language(5, "tr", "Türkçe", "tr_TR", _extend(_LATIN, {
        "2": "ç", "4": "ğı", "6": "ö", "7": "ş", "8": "ü",
    })),
)

_BY_CODE: dict[str, Language] = {lang.code: lang for lang in LANGUAGES}
_BY_ID: dict[int, Language] = {lang.id: lang for lang in LANGUAGES}


def get_language(key: str | int | None) -> Language | None:
    """Look a language up by code (``"en"``) or numeric id. Unknown → ``None``."""
    if key is None:
        return None
    if isinstance(key, int):
        return _BY_ID.get(key)
    key = key.strip().lower()
    if key.isdigit():
        return _BY_ID.get(int(key))
    return _BY_CODE.get(key)


def available_languages() -> list[Language]:
    return list(LANGUAGES)
