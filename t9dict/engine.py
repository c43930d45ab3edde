"""
t9dict.engine
=============
Typing session on top of the dictionary. No UI, no keyboard hooks.
Keeps the digits typed so far and the candidates for them, and reports
confirmed and learned words back to the dictionary.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future

from .dictionary_db import DictionaryDb, Status
from .languages import Language

logger = logging.getLogger(__name__)


class T9Engine:
    """
    Stateful T9 prediction session.

    Usage::

        engine = T9Engine(db, get_language("en"))
        for digit in "4663":
            engine.push_digit(digit)
        engine.wait()                # candidates arrive asynchronously
        print(engine.candidates)     # ['home', 'good', 'gone', ...]
        word = engine.confirm()      # returns 'home', resets sequence

    Candidates arrive from the dictionary worker; results for a sequence that
    is no longer the current one are dropped.
    """

    def __init__(
        self,
        db: DictionaryDb,
        language: Language,
        min_words: int = 5,
        max_words: int = 8,
    ) -> None:
        self.db = db
        self.language = language
        self.min_words = min_words
        self.max_words = max_words

        self.sequence: list[str] = []
        self.candidates: list[str] = []
        self.candidate_index: int = 0
        self.confirmed_words: list[str] = []

        self._lock = threading.Lock()
        self._pending: Future | None = None

    # ── Sequence management ───────────────────────────────────────────────────

    def push_digit(self, digit: str) -> Future:
        """Append a digit and request fresh candidates."""
        if len(digit) != 1 or not digit.isdigit():
            raise ValueError(f"Not a keypad digit: {digit!r}")
        self.sequence.append(digit)
        return self.refresh()

    def pop_digit(self) -> bool:
        """Remove the last digit. Returns ``True`` if the sequence is still non-empty."""
        if self.sequence:
            self.sequence.pop()
            if self.sequence:
                self.refresh()
            else:
                self._set_candidates("", [])
        return bool(self.sequence)

    def reset(self) -> None:
        self.sequence = []
        with self._lock:
            self.candidates = []
            self.candidate_index = 0

    def refresh(self) -> Future:
        """
        Ask the dictionary for candidates for the current sequence.

        The returned future resolves once the candidates have been applied.
        """
        key = "".join(self.sequence)
        applied: Future = Future()

        def apply(words: list[str]) -> None:
            self._set_candidates(key, words)
            applied.set_result(words)

        self.db.get_suggestions(self.language, key, self.min_words, self.max_words, callback=apply)
        self._pending = applied
        return applied

    def wait(self, timeout: float | None = None) -> None:
        """Block until the last candidate request has been applied. Meant for tests and scripts."""
        if self._pending is not None:
            self._pending.result(timeout)

    def _set_candidates(self, key: str, words: list[str]) -> None:
        with self._lock:
            if key != "".join(self.sequence):
                logger.debug("Dropping stale candidates for '%s'", key)
                return
            self.candidates = list(words)
            self.candidate_index = 0

    # ── Navigation ────────────────────────────────────────────────────────────

    def cycle_next(self) -> None:
        if self.candidates:
            self.candidate_index = (self.candidate_index + 1) % len(self.candidates)

    def cycle_prev(self) -> None:
        if self.candidates:
            self.candidate_index = (self.candidate_index - 1) % len(self.candidates)

    # ── Properties ────────────────────────────────────────────────────────────

    @property
    def current_word(self) -> str:
        if self.candidates:
            return self.candidates[self.candidate_index]
        # Fallback: first letter of each key
        return self.language.first_letters("".join(self.sequence))

    @property
    def has_input(self) -> bool:
        return bool(self.sequence)

    # ── Learning ──────────────────────────────────────────────────────────────

    def confirm(self) -> str:
        """Return the selected word, bump its frequency, and reset the sequence."""
        word = self.current_word
        if self.candidates:
            self.db.increment_word_frequency(
                self.language, word, self.language.get_digit_sequence_for_word(word)
            )
        self.confirmed_words.append(word)
        self.reset()
        return word

    def learn_word(self, word: str) -> "Future[Status] | None":
        """Add a word that is not in the dictionary yet."""
        word = word.strip()
        if not word:
            return None
        return self.db.insert_word(self.language, word)
