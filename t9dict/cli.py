"""
t9dict.cli
==========
Command-line entry point.
Registered as the ``t9dict`` console script in pyproject.toml.

Usage:
    t9dict suggest 4663              # ranked words for a digit sequence
    t9dict add Home                  # learn a new word
    t9dict bump home                 # count one more use of a known word
    t9dict import wordlists/en.txt   # bulk import a word list (one transaction)
    t9dict truncate                  # delete every word
    t9dict stats                     # words per language
    t9dict langs                     # available languages and word lists

Global options: --config PATH, --db PATH, --lang CODE, --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .dictionary_db import DictionaryDb, Status
from .exceptions import DictionaryError
from .languages import Language, available_languages, get_language
from .loader import DictionaryLoader

logger = logging.getLogger(__name__)

_LOG_FORMAT = "[T9] %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Install a single stderr handler on the ``t9dict`` logger (idempotent)."""
    root = logging.getLogger("t9dict")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
    return root


# ─── Commands ─────────────────────────────────────────────────────────────────

def _cmd_suggest(db: DictionaryDb, language: Language, args: argparse.Namespace, config: dict) -> int:
    limits = config["suggestions"]
    min_words = args.min if args.min is not None else limits["min_words"]
    max_words = args.max if args.max is not None else limits["max_words"]
    words = db.get_suggestions(language, args.sequence, min_words, max_words).result()
    if not words:
        print(f"No words for {args.sequence}")
        return 1
    for i, word in enumerate(words, 1):
        print(f"  {i:>2}. {word}")
    return 0


def _cmd_add(db: DictionaryDb, language: Language, args: argparse.Namespace, config: dict) -> int:
    status = db.insert_word(language, args.word).result()
    if status is Status.OK:
        print(f"Learned: {language.to_lowercase(args.word)}")
        return 0
    if status is Status.CONSTRAINT_VIOLATION:
        print(f"Already known: {language.to_lowercase(args.word)}")
    else:
        print(f"Could not add {args.word!r}")
    return 1


def _cmd_bump(db: DictionaryDb, language: Language, args: argparse.Namespace, config: dict) -> int:
    word = language.to_lowercase(args.word)
    sequence = language.get_digit_sequence_for_word(word)
    status = db.increment_word_frequency(language, word, sequence).result()
    if status is Status.OK:
        row = db.store.get(language.id, sequence, word)
        print(f"{word}: frequency {row.frequency if row else '?'}")
        return 0
    if status is Status.NOT_FOUND:
        print(f"Unknown word: {word}")
    else:
        print(f"Could not update {word!r}")
    return 1


def _cmd_import(db: DictionaryDb, language: Language, args: argparse.Namespace, config: dict) -> int:
    source = Path(args.source)
    if not source.is_absolute() and not source.exists():
        source = Path(config["wordlist_dir"]) / source
    if not source.exists():
        print(f"ERROR: Source file not found: {source}")
        return 1

    print(f"Source : {source}")
    loader = DictionaryLoader(db, batch_size=args.batch_size)
    result = loader.load(language, source, replace=args.replace).result()
    if result.status is not Status.OK:
        reason = (
            "some words are already in the dictionary (use --replace)"
            if result.status is Status.CONSTRAINT_VIOLATION
            else "see the log for details"
        )
        print(f"Import failed, nothing was changed: {reason}.")
        return 1
    print(f"Total  : {result.imported:,} words  ({result.skipped} skipped)")
    return 0


def _cmd_truncate(db: DictionaryDb, language: Language, args: argparse.Namespace, config: dict) -> int:
    if not args.yes:
        print("Refusing to delete every word without --yes.")
        return 1
    db.truncate_words().result()
    print("Dictionary cleared.")
    return 0


def _cmd_stats(db: DictionaryDb, language: Language, args: argparse.Namespace, config: dict) -> int:
    print(f"Database: {db.store.path}\n")
    for lang in available_languages():
        print(f"  {lang.code:<4} {lang.name:<10} {db.store.count(lang.id):>8,} words")
    print(f"\n  total           {db.store.count():>8,} words")
    return 0


def _list_languages(wordlist_dir: str) -> None:
    wdir = Path(wordlist_dir)
    print("Available languages:\n")
    for lang in available_languages():
        wordlist = wdir / f"{lang.code}.txt"
        note = f"({wordlist.name})" if wordlist.exists() else "(no word list)"
        print(f"  {lang.code:<4} id={lang.id:<3} {lang.name:<10} {note}")
    print()


_COMMANDS = {
    "suggest": _cmd_suggest,
    "add": _cmd_add,
    "bump": _cmd_bump,
    "import": _cmd_import,
    "truncate": _cmd_truncate,
    "stats": _cmd_stats,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="t9dict",
        description="T9 predictive-text dictionary: suggestions, learning and word list import.",
    )
    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        help="Path to a custom config.json (overrides default resolution order).",
    )
    parser.add_argument("--db", metavar="PATH", help="Dictionary database file (overrides config).")
    parser.add_argument(
        "--lang", "-l",
        metavar="CODE",
        help="Language code or id, e.g. en  (defaults to the first configured language).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("suggest", help="Show ranked words for a digit sequence.")
    p.add_argument("sequence")
    p.add_argument("--min", type=int, help="Minimum number of words (prefix matches fill up to it).")
    p.add_argument("--max", type=int, help="Maximum number of exact matches.")

    p = sub.add_parser("add", help="Add a new word.")
    p.add_argument("word")

    p = sub.add_parser("bump", help="Increment the frequency of a known word.")
    p.add_argument("word")

    p = sub.add_parser("import", help="Import a word list in one transaction.")
    p.add_argument("source", help="Word list (.txt, one word per line, optional <TAB>frequency).")
    p.add_argument("--replace", action="store_true", help="Replace every word in one transaction.")
    p.add_argument("--batch-size", type=int, default=5000)

    p = sub.add_parser("truncate", help="Delete every word.")
    p.add_argument("--yes", action="store_true", help="Confirm.")

    sub.add_parser("stats", help="Count words per language.")
    sub.add_parser("langs", help="List available languages and exit.")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging("DEBUG" if args.verbose else config.get("log_level", "WARNING"))

    if args.command == "langs":
        _list_languages(config["wordlist_dir"])
        return 0

    language = get_language(args.lang or config["languages"][0])
    if language is None:
        print(f"ERROR: Unknown language: {args.lang or config['languages'][0]}")
        return 2

    db = DictionaryDb.get_instance(args.db or config["db_path"])
    try:
        return _COMMANDS[args.command](db, language, args, config)
    except DictionaryError as e:
        print(f"ERROR: {e}")
        return 1
    finally:
        DictionaryDb.reset_instance()


if __name__ == "__main__":
    sys.exit(main())
