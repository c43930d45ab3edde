"""
t9dict.store
============
SQLite-backed word table: (language, digit sequence, word) → frequency.

The store trusts its caller: it never checks that a sequence really encodes
its word. What it does own is uniqueness, the ``frequency >= 1`` rule and
frequency normalization (see :meth:`WordStore.increment_frequency`).

One connection is shared by every thread and guarded by a re-entrant lock.
An explicit transaction keeps the lock from ``begin_transaction`` until
``end_transaction``, so only the thread that opened it may end it.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConstraintViolation, StoreFailure, TransactionError, WordNotFound

logger = logging.getLogger(__name__)

FREQUENCY_CEILING = 50_000
FREQUENCY_DIVISOR = 10_000

# Any character sorting right after "9"; every sequence is made of digits,
# so [seq, seq + ":") covers exactly the sequences starting with seq.
_PREFIX_END = ":"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS words (
    id   INTEGER PRIMARY KEY,
    lang INTEGER NOT NULL,
    seq  TEXT    NOT NULL CHECK (length(seq) > 0),
    word TEXT    NOT NULL,
    freq INTEGER NOT NULL DEFAULT 1 CHECK (freq >= 1),
    UNIQUE (lang, seq, word)
);
CREATE INDEX IF NOT EXISTS idx_words_lang_seq_freq ON words (lang, seq, freq DESC);
"""

_COLUMNS = "lang, seq, word, freq"


@dataclass(frozen=True)
class Word:
    language_id: int
    sequence: str
    word: str
    frequency: int = 1

    @classmethod
    def from_row(cls, row: tuple) -> "Word":
        return cls(language_id=row[0], sequence=row[1], word=row[2], frequency=row[3])


class WordStore:
    """
    Persistent word table.

    Usage::

        store = WordStore("~/.config/t9dict/t9dict.db")
        store.insert(1, "4663", "home")
        store.increment_frequency(1, "home", "4663")
        store.get_many(1, "4663", limit=5)    # [Word(1, '4663', 'home', 2)]

    Pass ``":memory:"`` for a throwaway database.
    """

    def __init__(self, path: str | Path = ":memory:") -> None:
        self.path = str(path)
        if self.path != ":memory:":
            db_file = Path(self.path).expanduser()
            db_file.parent.mkdir(parents=True, exist_ok=True)
            self.path = str(db_file)

        self._lock = threading.RLock()
        self._tx_owner: int | None = None
        # Autocommit: every statement outside begin/end_transaction is atomic on its own.
        self._conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
        with self._guard("create schema"):
            self._conn.executescript(_SCHEMA)
        logger.debug("Opened word store at %s", self.path)

    # ── Error translation ─────────────────────────────────────────────────────

    @contextlib.contextmanager
    def _guard(self, action: str) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                yield self._conn
            except sqlite3.IntegrityError as e:
                raise ConstraintViolation(f"Constraint violation on {action}: {e}") from e
            except sqlite3.Error as e:
                raise StoreFailure(f"Failed to {action}: {e}") from e

    # ── Writes ────────────────────────────────────────────────────────────────

    def insert(self, language_id: int, sequence: str, word: str) -> None:
        """Insert a new word with frequency 1. Duplicates raise :class:`ConstraintViolation`."""
        with self._guard(f"insert '{word}' / '{sequence}' [lang {language_id}]") as conn:
            conn.execute(
                "INSERT INTO words (lang, seq, word, freq) VALUES (?, ?, ?, 1)",
                (language_id, sequence, word),
            )

    def increment_frequency(self, language_id: int, word: str, sequence: str) -> None:
        """
        Add 1 to the frequency of one word.

        When the new value exceeds ``FREQUENCY_CEILING`` it is divided by
        ``FREQUENCY_DIVISOR`` in the same UPDATE, so a stored frequency never
        ends up above the ceiling. Raises :class:`WordNotFound` if the row
        does not exist.
        """
        with self._guard(f"increment '{word}' / '{sequence}' [lang {language_id}]") as conn:
            cursor = conn.execute(
                """
                UPDATE words
                   SET freq = CASE WHEN freq + 1 > :ceiling
                                   THEN (freq + 1) / :divisor
                                   ELSE freq + 1
                              END
                 WHERE lang = :lang AND word = :word AND seq = :seq
                """,
                {
                    "ceiling": FREQUENCY_CEILING,
                    "divisor": FREQUENCY_DIVISOR,
                    "lang": language_id,
                    "word": word,
                    "seq": sequence,
                },
            )
            if cursor.rowcount == 0:
                raise WordNotFound(
                    f"No word '{word}' with sequence '{sequence}' in language {language_id}"
                )

    def insert_many(self, rows: Iterable[Word]) -> None:
        """
        Bulk insert, keeping each row's frequency.

        Inside an explicit transaction the rows are only staged. Outside of
        one, the batch runs in its own transaction, so it is all or nothing.
        """
        params = [(w.language_id, w.sequence, w.word, w.frequency) for w in rows]
        if not params:
            return
        if self.in_transaction:
            self._insert_rows(params)
            return
        with self.transaction():
            self._insert_rows(params)

    def _insert_rows(self, params: list[tuple]) -> None:
        with self._guard(f"insert {len(params)} words") as conn:
            conn.executemany(
                f"INSERT INTO words ({_COLUMNS}) VALUES (?, ?, ?, ?)",
                params,
            )

    def clear_all(self) -> None:
        """Delete every word. Irreversible."""
        with self._guard("clear all words") as conn:
            conn.execute("DELETE FROM words")
        logger.info("Word store cleared")

    # ── Transactions ──────────────────────────────────────────────────────────

    @property
    def in_transaction(self) -> bool:
        """True when the calling thread has an open transaction."""
        return self._tx_owner == threading.get_ident()

    def begin_transaction(self) -> None:
        """Start staging writes. Nesting is not supported and raises :class:`TransactionError`."""
        self._lock.acquire()
        if self._tx_owner is not None:
            self._lock.release()
            raise TransactionError("A transaction is already running")
        try:
            self._conn.execute("BEGIN")
        except sqlite3.Error as e:
            self._lock.release()
            raise StoreFailure(f"Failed to begin a transaction: {e}") from e
        self._tx_owner = threading.get_ident()

    def end_transaction(self, success: bool) -> None:
        """Commit the staged writes when ``success`` is true, otherwise discard them."""
        if not self.in_transaction:
            raise TransactionError("No transaction to end on this thread")
        try:
            self._conn.execute("COMMIT" if success else "ROLLBACK")
        except sqlite3.Error as e:
            if self._conn.in_transaction:
                self._conn.execute("ROLLBACK")
            raise StoreFailure(f"Failed to end the transaction: {e}") from e
        finally:
            self._tx_owner = None
            self._lock.release()

    @contextlib.contextmanager
    def transaction(self) -> Iterator["WordStore"]:
        """``begin_transaction`` / ``end_transaction`` as a ``with`` block; commits unless it raises."""
        self.begin_transaction()
        success = False
        try:
            yield self
            success = True
        finally:
            self.end_transaction(success)

    # ── Reads ─────────────────────────────────────────────────────────────────

    def get_many(self, language_id: int, sequence: str, limit: int) -> list[Word]:
        """Words whose sequence equals ``sequence``, most frequent first."""
        if limit <= 0:
            return []
        with self._guard(f"read sequence '{sequence}'") as conn:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS} FROM words
                 WHERE lang = ? AND seq = ?
                 ORDER BY freq DESC, id ASC
                 LIMIT ?
                """,
                (language_id, sequence, limit),
            ).fetchall()
        return [Word.from_row(r) for r in rows]

    def get_fuzzy(self, language_id: int, sequence: str, limit: int) -> list[Word]:
        """Words whose sequence is a longer completion of ``sequence``, most frequent first."""
        if limit <= 0:
            return []
        with self._guard(f"read completions of '{sequence}'") as conn:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS} FROM words
                 WHERE lang = ? AND seq > ? AND seq < ?
                 ORDER BY freq DESC, id ASC
                 LIMIT ?
                """,
                (language_id, sequence, sequence + _PREFIX_END, limit),
            ).fetchall()
        return [Word.from_row(r) for r in rows]

    def get(self, language_id: int, sequence: str, word: str) -> Word | None:
        with self._guard(f"read '{word}'") as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM words WHERE lang = ? AND seq = ? AND word = ?",
                (language_id, sequence, word),
            ).fetchone()
        return Word.from_row(row) if row else None

    def count(self, language_id: int | None = None) -> int:
        with self._guard("count words") as conn:
            if language_id is None:
                row = conn.execute("SELECT COUNT(*) FROM words").fetchone()
            else:
                row = conn.execute(
                    "SELECT COUNT(*) FROM words WHERE lang = ?", (language_id,)
                ).fetchone()
        return row[0]

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.debug("Closed word store at %s", self.path)
