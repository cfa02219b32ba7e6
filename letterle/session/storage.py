"""
Storage - The key-value persistence adapter.

The game keeps exactly one serialized record per device, under one key.
The adapter is injected into reconciliation and the store, so tests can
substitute the in-memory fake.

Design decisions:
- Values are opaque strings; parsing belongs to the record codec
- FileStorage keeps one JSON file per key in a data directory
- The directory is created on first write, not on construction
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
import logging
import re

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class Storage(ABC):
    """Interface for the persisted-record store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if nothing is stored."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Forget a value. Missing keys are ignored."""
        pass


class MemoryStorage(Storage):
    """
    In-process storage.

    Usage:
        storage = MemoryStorage()
        storage.set("localData", "{...}")
        storage.get("localData")
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(Storage):
    """
    File-based storage under a data directory.

    Usage:
        storage = FileStorage(data_dir="~/.letterle")
        raw = storage.get("localData")
    """

    def __init__(self, data_dir: str | Path | None = None):
        if data_dir is None:
            data_dir = Path.home() / ".letterle"
        self.data_dir = Path(data_dir).expanduser()

    def get(self, key: str) -> str | None:
        path = self._get_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            # An unreadable record counts as no record
            logger.warning("Could not read %s: %s", path, e)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._get_path(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Write to a sibling file first so a crash never leaves half a record
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def delete(self, key: str) -> None:
        self._get_path(key).unlink(missing_ok=True)

    def _get_path(self, key: str) -> Path:
        """Get file path for a key."""
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"
