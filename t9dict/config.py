"""
t9dict.config
=============
Loads config.json and merges it over the defaults.
Falls back to the defaults if the file is missing or cannot be parsed.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# The package ships a default config.json alongside this file.
_PACKAGE_DIR = Path(__file__).parent
_DEFAULT_CONFIG_PATH = _PACKAGE_DIR / "config.json"

ENV_CONFIG = "T9DICT_CONFIG"


DEFAULTS: dict = {
    "languages": ["en"],
    "db_path": "~/.config/t9dict/t9dict.db",
    "wordlist_dir": str(_PACKAGE_DIR / "wordlists"),
    "suggestions": {
        "min_words": 5,
        "max_words": 8,
    },
    "log_level": "WARNING",
}


def load_config(path: str | Path | None = None) -> dict:
    """
    Load configuration from a JSON file and merge with defaults.

    Resolution order (first found wins):
        1. Explicit ``path`` argument
        2. ``T9DICT_CONFIG`` environment variable
        3. ``config.json`` in the current working directory
        4. Packaged default ``t9dict/config.json``

    Returns a fully-populated config dict.
    """
    cfg = copy.deepcopy(DEFAULTS)

    candidates: list[Path] = []
    if path:
        candidates.append(Path(path))
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        candidates.append(Path(env_path))
    candidates.append(Path.cwd() / "config.json")
    candidates.append(_DEFAULT_CONFIG_PATH)

    for candidate in candidates:
        if candidate.exists():
            try:
                with open(candidate, "r", encoding="utf-8") as f:
                    user = json.load(f)
                # Strip comment keys (keys starting with _)
                user = {k: v for k, v in user.items() if not k.startswith("_")}
                if "suggestions" in user:
                    cfg["suggestions"].update(user.pop("suggestions"))
                cfg.update(user)
                # Resolve relative paths against the config file's location
                for key in ("wordlist_dir", "db_path"):
                    value = str(cfg[key])
                    if value != ":memory:" and not value.startswith("~") and not Path(value).is_absolute():
                        cfg[key] = str(candidate.parent / value)
            except (OSError, ValueError, AttributeError) as e:
                logger.warning("Could not parse %s: %s", candidate, e)
            break   # stop at first found

    return cfg
