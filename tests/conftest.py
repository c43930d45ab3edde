import pytest

from t9dict.dictionary_db import DictionaryDb
from t9dict.languages import get_language
from t9dict.store import WordStore


@pytest.fixture
def store():
    s = WordStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def db():
    d = DictionaryDb(WordStore(":memory:"))
    yield d
    d.close()


@pytest.fixture
def english():
    return get_language("en")


@pytest.fixture(autouse=True)
def reset_shared_db():
    """Never leak the process-wide dictionary between tests."""
    yield
    DictionaryDb.reset_instance()
