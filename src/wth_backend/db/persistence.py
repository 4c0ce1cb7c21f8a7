"""
Device Key-Value Persistence Layer

String values under string keys, the same contract as a mobile
AsyncStorage. Stores take a storage instance instead of reaching for a
global, so the backend can be swapped (file on disk, in-memory for tests).
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# ===================================================================
# STORAGE INTERFACE
# ===================================================================

class KeyValueStorage:
    """get/set/delete over keys scoped to one namespace."""

    def __init__(self, namespace: str = "wth"):
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class InMemoryStorage(KeyValueStorage):
    """Process-local storage (lost on restart)."""

    def __init__(self, namespace: str = "wth"):
        super().__init__(namespace)
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self._data[self._key(key)] = value

    def delete(self, key: str) -> None:
        self._data.pop(self._key(key), None)


class JsonFileStorage(KeyValueStorage):
    """
    Storage persisted to a single JSON file; survives restarts.

    Every write rewrites the whole file through a temp file and rename.
    There is no locking: one writer per file.
    """

    def __init__(self, path, namespace: str = "wth"):
        super().__init__(namespace)
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error("Failed to read storage file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_path, self.path)
        except Exception:
            os.unlink(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._load().get(self._key(key))

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[self._key(key)] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(self._key(key), None) is not None:
            self._dump(data)

# ===================================================================
# JSON HELPERS
# ===================================================================

def read_json(storage: KeyValueStorage, key: str, default: Any) -> Any:
    """
    Read a JSON value stored under ``key``.

    Returns ``default`` when the key is absent or the stored text is not valid JSON.
    """
    stored = storage.get(key)
    if stored is None:
        return default
    try:
        return json.loads(stored)
    except ValueError as e:
        logger.error("Corrupt value under %s: %s", key, e)
        return default


def write_json(storage: KeyValueStorage, key: str, value: Any) -> None:
    storage.set(key, json.dumps(value))
