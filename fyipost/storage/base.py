"""
Storage Backends

Key/value stores for bot state. Values are JSON-compatible dicts.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """State could not be read from or written to storage."""
    pass


class Storage(ABC):
    """Abstract key/value store."""

    @abstractmethod
    def read(self, keys: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Read items by key.

        Args:
            keys: Keys to read

        Returns:
            Mapping of found keys to their items (missing keys are omitted)
        """
        pass

    @abstractmethod
    def write(self, changes: Dict[str, Dict[str, Any]]) -> None:
        """
        Write items, replacing any existing values.

        Args:
            changes: Mapping of keys to items
        """
        pass

    @abstractmethod
    def delete(self, keys: Iterable[str]) -> None:
        """Delete items by key. Missing keys are ignored."""
        pass


class MemoryStorage(Storage):
    """In-process storage, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self._items: Dict[str, Dict[str, Any]] = copy.deepcopy(initial or {})

    def read(self, keys: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        return {
            key: copy.deepcopy(self._items[key])
            for key in keys
            if key in self._items
        }

    def write(self, changes: Dict[str, Dict[str, Any]]) -> None:
        for key, item in changes.items():
            self._items[key] = copy.deepcopy(item)

    def delete(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._items.pop(key, None)


class FileStorage(Storage):
    """
    Storage backed by a single JSON document on disk.

    The whole document is rewritten on every write.
    """

    def __init__(self, path: Path):
        """
        Initialize file storage.

        Args:
            path: JSON file holding all items. Parent directories are created.
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Corrupt state file {self.path}: {e}")
        except IOError as e:
            raise StorageError(f"Cannot read {self.path}: {e}")

        if not isinstance(data, dict):
            raise StorageError(f"Corrupt state file {self.path}: expected an object")
        return data

    def _dump(self, data: Dict[str, Dict[str, Any]]) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except IOError as e:
            raise StorageError(f"Cannot write {self.path}: {e}")

    def read(self, keys: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        data = self._load()
        return {key: data[key] for key in keys if key in data}

    def write(self, changes: Dict[str, Dict[str, Any]]) -> None:
        data = self._load()
        data.update(changes)
        self._dump(data)
        logger.debug("Wrote %d item(s) to %s", len(changes), self.path)

    def delete(self, keys: Iterable[str]) -> None:
        data = self._load()
        removed = [key for key in keys if data.pop(key, None) is not None]
        if removed:
            self._dump(data)
