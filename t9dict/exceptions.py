"""
t9dict.exceptions
=================
Errors raised by the dictionary store and its write coordinator.

Validation errors are raised on the caller's thread before anything is
dispatched. Storage errors (``StoreFailure`` and subclasses) are raised by
:class:`~t9dict.store.WordStore` and turned into a status code when the call
went through :class:`~t9dict.dictionary_db.DictionaryDb`.
"""

from __future__ import annotations


class DictionaryError(Exception):
    """Base class for every t9dict error."""


class InvalidLanguageException(DictionaryError):
    def __init__(self, message: str = "No valid language given.") -> None:
        super().__init__(message)


class InsertBlankWordException(DictionaryError):
    def __init__(self, message: str = "Cannot insert a blank word.") -> None:
        super().__init__(message)


class InvalidWordException(DictionaryError):
    """The word contains characters outside the language alphabet."""


class InconsistentIncrementInput(DictionaryError):
    """Exactly one of word / sequence was empty."""


class StoreFailure(DictionaryError):
    """Any storage error that has no more specific class."""


class ConstraintViolation(StoreFailure):
    """The (language, sequence, word) triple already exists, or a row broke a CHECK."""


class WordNotFound(StoreFailure):
    pass


class TransactionError(StoreFailure):
    """Nested ``begin_transaction`` or ``end_transaction`` without one."""
