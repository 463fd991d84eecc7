from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional, Protocol

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, text: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, text: str) -> None:
        self._data[key] = text

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """One ``<key>.json`` file per key under a data directory."""

    def __init__(self, directory: str = "data"):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, text: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
