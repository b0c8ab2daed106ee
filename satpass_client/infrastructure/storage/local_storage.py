"""
Key/value stores for per-user client settings (API endpoint override, theme
preference). Values are strings.

The UI uses the browser's localStorage (`satpass_client.ui.browser_storage`);
`FileStorage` keeps the same items in a JSON file for tests and headless use.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from satpass_client.utils.config import storage_path
from satpass_client.utils.logger import get_logger

logger = get_logger("storage")


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class FileStorage:
    """
    String key/value store backed by a JSON file.

    Reads tolerate a missing or corrupt file (treated as empty). Write errors
    propagate to the caller.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else storage_path()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.is_file():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers invalid JSON and undecodable bytes
            logger.warning("Local storage read failed for %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage at %s is not an object; ignoring it", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _write_all(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(items, f, ensure_ascii=False, indent=2)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = str(value)
        self._write_all(items)
        logger.debug("Stored %s in %s", key, self._path)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)
