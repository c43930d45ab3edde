"""
t9dict
======
Predictive-text dictionary for T9 keypads: ranked suggestions for a digit
sequence, learning from usage, and word list import.

Public API
----------
    from t9dict import DictionaryDb, T9Engine, get_language

    db = DictionaryDb.get_instance("~/.config/t9dict/t9dict.db")
    english = get_language("en")
    db.insert_word(english, "home").result()
    db.get_suggestions(english, "4663", 3, 8).result()   # ['home', ...]
"""

from .config import load_config
from .dictionary_db import DictionaryDb, Status
from .engine import T9Engine
from .languages import Language, get_language
from .loader import DictionaryLoader
from .store import Word, WordStore

__all__ = [
    "DictionaryDb",
    "DictionaryLoader",
    "Language",
    "Status",
    "T9Engine",
    "Word",
    "WordStore",
    "get_language",
    "load_config",
]
__version__ = "1.0.0"
