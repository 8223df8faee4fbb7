"""
High Score Persistence
======================

Key-value stores for the single persisted high score.

The engine only needs get/set of text values under one key, so any
object with those two methods can be injected.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """A store could not read or write its backing medium."""


# Errors a store may raise that never reach the game loop
STORE_ERRORS = (PersistenceError, OSError, ValueError)


class HighScoreStore(Protocol):
    """
    Scalar key-value store; values are text.

    Stores should raise PersistenceError when their medium fails. OSError
    and ValueError from stores that do not wrap their errors are treated
    the same way by load_high_score and save_high_score.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store for tests and headless runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __repr__(self) -> str:
        return f"MemoryStore({self._data!r})"


class JsonFileStore:
    """
    Store backed by a small JSON object on disk.

    A missing file reads as an empty store. Parent directories are
    created on the first write.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Expected a JSON object in {self._path}")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except PersistenceError:
            logger.warning("Overwriting unreadable store %s", self._path)
            data = {}
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self._path}: {e}") from e


def load_high_score(store: Optional[HighScoreStore], key: str) -> int:
    """
    Read the stored high score.

    Absent, unreadable, malformed or negative values all read as 0.
    """
    if store is None:
        return 0
    try:
        raw = store.get(key)
    except STORE_ERRORS as e:
        logger.warning("Could not read high score: %s", e)
        return 0
    if raw is None:
        return 0
    try:
        value = int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring malformed high score %r under %s", raw, key)
        return 0
    return max(0, value)


def save_high_score(store: Optional[HighScoreStore], key: str, value: int) -> bool:
    """
    Write the high score as text.

    Failures are logged and dropped; the game never stops on them.

    Returns:
        True if the store accepted the value.
    """
    if store is None:
        return False
    try:
        store.set(key, str(int(value)))
    except STORE_ERRORS as e:
        logger.warning("High score %d not saved: %s", value, e)
        return False
    return True
