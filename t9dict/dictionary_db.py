"""
t9dict.dictionary_db
====================
The entry point used by an input method: validates requests, runs them on a
background worker and hands the outcome back through a future and an
optional callback.

Public API
----------
    db = DictionaryDb.get_instance("~/.config/t9dict/t9dict.db")
    db.get_suggestions(language, "4663", 3, 8, callback=show)
    db.insert_word(language, "Home", callback=on_status)
    db.increment_word_frequency(language, "home", "4663")

Nothing that runs on the worker raises into the caller. Storage errors are
logged and reported as a :class:`Status` (or an empty suggestion list).
Validation errors are raised right away, before anything is dispatched.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from enum import IntEnum
from pathlib import Path
from typing import Any

from .exceptions import (
    ConstraintViolation,
    InconsistentIncrementInput,
    InsertBlankWordException,
    InvalidLanguageException,
    WordNotFound,
)
from .languages import Language
from .query import suggest
from .store import Word, WordStore

logger = logging.getLogger(__name__)


class Status(IntEnum):
    OK = 0
    CONSTRAINT_VIOLATION = 1
    FAILURE = 2
    NOT_FOUND = 3


class DictionaryDb:
    """
    Write coordinator and async boundary around one :class:`WordStore`.

    Every background operation runs on a single worker thread, so requests
    are executed in the order they were submitted. Callers that need one
    operation to finish before the next must still wait for its future or
    callback.
    """

    _instance: "DictionaryDb | None" = None
    _instance_lock = threading.Lock()

    def __init__(self, store: WordStore) -> None:
        self.store = store
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="t9dict-db")

    # ── Shared instance ───────────────────────────────────────────────────────

    @classmethod
    def get_instance(cls, db_path: str | Path = ":memory:") -> "DictionaryDb":
        """
        Return the process-wide instance, creating it on first use.

        ``db_path`` only matters for the call that creates it. The instance
        lives until :meth:`reset_instance` (tests) or process exit.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls(WordStore(db_path))
                    logger.info("Dictionary database ready at %s", cls._instance.store.path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Close and forget the shared instance; the next ``get_instance`` opens a new one."""
        with cls._instance_lock:
            if cls._instance is not None:
                cls._instance.close()
                cls._instance = None

    def close(self) -> None:
        """Finish queued work, then close the store."""
        self._executor.shutdown(wait=True)
        self.store.close()

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def submit(self, job: Callable[[], Any], callback: Callable[[Any], None] | None) -> Future:
        future = self._executor.submit(job)
        if callback is not None:
            future.add_done_callback(lambda f: self._deliver(callback, f))
        return future

    @staticmethod
    def _deliver(callback: Callable[[Any], None], future: Future) -> None:
        try:
            callback(future.result())
        except Exception:
            logger.exception("Dictionary callback failed")

    # ── Transactions ──────────────────────────────────────────────────────────

    def begin_transaction(self) -> None:
        self.store.begin_transaction()

    def end_transaction(self, success: bool) -> None:
        self.store.end_transaction(success)

    # ── Writes ────────────────────────────────────────────────────────────────

    def truncate_words(self, callback: Callable[[Status], None] | None = None) -> "Future[Status]":
        def job() -> Status:
            try:
                self.store.clear_all()
            except Exception as e:
                logger.error("Could not clear the dictionary: %s", e)
                return Status.FAILURE
            return Status.OK

        return self.submit(job, callback)

    def insert_word(
        self,
        language: Language | None,
        word: str | None,
        callback: Callable[[Status], None] | None = None,
    ) -> "Future[Status]":
        """
        Add a word typed by the user.

        The row is inserted with frequency 1 and immediately bumped, the same
        way every later use bumps it, so a fresh word ends up at 2.
        """
        if language is None:
            raise InvalidLanguageException()
        if not word:
            raise InsertBlankWordException()

        dict_word = Word(
            language_id=language.id,
            sequence=language.get_digit_sequence_for_word(word),
            word=language.to_lowercase(word),
        )

        def job() -> Status:
            try:
                self.store.insert(dict_word.language_id, dict_word.sequence, dict_word.word)
                self.store.increment_frequency(
                    dict_word.language_id, dict_word.word, dict_word.sequence
                )
            except ConstraintViolation:
                logger.error(
                    "Word already exists: '%s' (sequence '%s', language %d)",
                    dict_word.word, dict_word.sequence, dict_word.language_id,
                )
                return Status.CONSTRAINT_VIOLATION
            except Exception as e:
                logger.error(
                    "Could not insert '%s' (sequence '%s', language %d): %s",
                    dict_word.word, dict_word.sequence, dict_word.language_id, e,
                )
                return Status.FAILURE
            return Status.OK

        return self.submit(job, callback)

    def insert_words_sync(self, words: Iterable[Word]) -> None:
        """
        Bulk import on the calling thread.

        Wrap it in :meth:`begin_transaction` / :meth:`end_transaction` to make
        a multi-call import all or nothing. Store errors propagate.
        """
        self.store.insert_many(words)

    def increment_word_frequency(
        self,
        language: Language | None,
        word: str | None,
        sequence: str | None,
    ) -> "Future[Status]":
        """
        Fire-and-forget frequency bump. Failures are only logged.

        The returned future resolves to the outcome, for callers that care.
        """
        if language is None:
            raise InvalidLanguageException()

        # Nothing to count.
        if not word and not sequence:
            done: Future = Future()
            done.set_result(Status.OK)
            return done

        # A word always has a sequence and the other way round.
        if not word or not sequence:
            raise InconsistentIncrementInput(
                f"Word and sequence must both be set or both be empty, got {word!r} / {sequence!r}"
            )

        def job() -> Status:
            try:
                self.store.increment_frequency(language.id, word, sequence)
            except WordNotFound as e:
                logger.warning("Could not increment: %s", e)
                return Status.NOT_FOUND
            except Exception as e:
                logger.error(
                    "Could not increment '%s' (sequence '%s', language %d): %s",
                    word, sequence, language.id, e,
                )
                return Status.FAILURE
            return Status.OK

        return self.submit(job, None)

    # ── Reads ─────────────────────────────────────────────────────────────────

    def get_suggestions(
        self,
        language: Language | None,
        sequence: str | None,
        min_words: int,
        max_words: int,
        callback: Callable[[list[str]], None] | None = None,
    ) -> "Future[list[str]]":
        language_id = language.id if language is not None else None

        def job() -> list[str]:
            try:
                return suggest(self.store, language_id, sequence, min_words, max_words)
            except Exception as e:
                logger.error(
                    "Could not get suggestions for '%s' (language %s): %s",
                    sequence, language_id, e,
                )
                return []

        return self.submit(job, callback)
