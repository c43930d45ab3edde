"""
t9dict.loader
=============
Import a plain-text word list into the dictionary.

File format, one entry per line::

    # comment
    home
    gone<TAB>120        ← optional starting frequency

The whole file goes in as one transaction: a failure anywhere leaves the
dictionary as it was. With ``replace=True`` the old words are deleted inside
that same transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path

from .dictionary_db import DictionaryDb, Status
from .exceptions import ConstraintViolation, StoreFailure
from .languages import Language
from .store import FREQUENCY_CEILING, Word

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5000


@dataclass(frozen=True)
class LoadResult:
    status: Status
    imported: int = 0
    skipped: int = 0


def read_wordlist(path: str | Path) -> list[tuple[str, int]]:
    """
    Read ``(word, frequency)`` pairs from a word list.

    Blank lines and lines starting with ``#`` are skipped. A missing or
    malformed frequency column counts as 1. Frequencies are clamped to
    ``1..FREQUENCY_CEILING``.
    """
    entries: list[tuple[str, int]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            word, _, freq = line.partition("\t")
            try:
                frequency = min(max(int(freq), 1), FREQUENCY_CEILING) if freq.strip() else 1
            except ValueError:
                frequency = 1
            entries.append((word.strip(), frequency))
    return entries


class DictionaryLoader:
    """
    Bulk importer.

    Usage::

        loader = DictionaryLoader(db)
        loader.load(get_language("en"), "wordlists/en.txt", callback=print)
    """

    def __init__(self, db: DictionaryDb, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self.db = db
        self.batch_size = max(batch_size, 1)

    def prepare(self, language: Language, path: str | Path) -> tuple[list[Word], int]:
        """Turn a word list into store rows. Returns ``(rows, skipped)``."""
        rows: list[Word] = []
        seen: set[tuple[str, str]] = set()
        skipped = 0
        for raw, frequency in read_wordlist(path):
            word = language.to_lowercase(raw)
            if not word or not language.is_mappable(word):
                skipped += 1
                continue
            sequence = language.get_digit_sequence_for_word(word)
            if (sequence, word) in seen:
                skipped += 1
                continue
            seen.add((sequence, word))
            rows.append(Word(language.id, sequence, word, frequency))
        if skipped:
            logger.info("Skipped %d duplicate or unmappable word(s) in %s", skipped, path)
        return rows, skipped

    def load_sync(self, language: Language, path: str | Path, replace: bool = False) -> LoadResult:
        """
        Import on the calling thread. Never raises for file or store errors.

        ``replace`` clears the dictionary first, in the import transaction,
        so a failed import keeps the old words.
        """
        try:
            rows, skipped = self.prepare(language, path)
        except OSError as e:
            logger.error("Could not read word list %s: %s", path, e)
            return LoadResult(Status.FAILURE)

        try:
            self.db.begin_transaction()
        except StoreFailure as e:
            logger.error("Could not start importing %s: %s", path, e)
            return LoadResult(Status.FAILURE, skipped=skipped)

        status = Status.FAILURE
        try:
            if replace:
                self.db.store.clear_all()
            for start in range(0, len(rows), self.batch_size):
                self.db.insert_words_sync(rows[start:start + self.batch_size])
            status = Status.OK
        except ConstraintViolation as e:
            status = Status.CONSTRAINT_VIOLATION
            logger.error("Failed importing %s for language %s. %s", path, language.code, e)
        except StoreFailure as e:
            logger.error("Failed importing %s for language %s. %s", path, language.code, e)
        finally:
            try:
                self.db.end_transaction(status is Status.OK)
            except StoreFailure as e:
                logger.error("Could not finish importing %s: %s", path, e)
                status = Status.FAILURE

        if status is not Status.OK:
            return LoadResult(status, skipped=skipped)
        logger.info("Imported %d words [%s] from %s", len(rows), language.code, path)
        return LoadResult(Status.OK, imported=len(rows), skipped=skipped)

    def load(
        self,
        language: Language,
        path: str | Path,
        callback: Callable[[LoadResult], None] | None = None,
        replace: bool = False,
    ) -> "Future[LoadResult]":
        """Import on the dictionary worker; the result arrives via future / callback."""
        return self.db.submit(lambda: self.load_sync(language, path, replace), callback)
