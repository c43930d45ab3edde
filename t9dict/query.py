"""
t9dict.query
============
Ranked retrieval: turn a digit sequence into an ordered list of words.

Two phases:

1. exact matches, e.g. ``"9422"`` → ``what``, ``whig``;
2. when those are too few, longer words whose sequence starts with the
   typed digits, e.g. ``"765"`` → ``roll``, ``roller``.
"""

from __future__ import annotations

import logging

from .store import WordStore

logger = logging.getLogger(__name__)

# Prefix completions are only looked up from this many digits on.
MIN_FUZZY_SEQUENCE_LENGTH = 2


def suggest(
    store: WordStore,
    language_id: int | None,
    sequence: str | None,
    min_words: int,
    max_words: int,
) -> list[str]:
    """
    Return up to ``max_words`` exact matches, topped up with prefix matches
    until there are ``min_words`` words, if possible.

    ``min_words`` is clamped to ``>= 0`` and ``max_words`` to ``>= min_words``.
    Since the prefix phase only fills the gap up to ``min_words``, the result
    never has more than ``max_words`` entries.
    """
    min_words = max(min_words, 0)
    max_words = max(max_words, min_words)

    if not sequence:
        logger.warning("Suggestions requested for an empty sequence.")
        return []

    if language_id is None:
        logger.warning("Suggestions requested without a language.")
        return []

    exact = store.get_many(language_id, sequence, max_words)
    logger.debug("Exact matches for '%s': %d", sequence, len(exact))
    suggestions = [w.word for w in exact]

    if len(exact) < min_words and len(sequence) >= MIN_FUZZY_SEQUENCE_LENGTH:
        extra = store.get_fuzzy(language_id, sequence, min_words - len(exact))
        logger.debug("Fuzzy matches for '%s': %d", sequence, len(extra))
        suggestions.extend(w.word for w in extra)

    return suggestions
