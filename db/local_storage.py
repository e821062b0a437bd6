"""
db/local_storage.py
-------------------
A small key/value store that keeps one JSON document per key on disk.
It plays the role of the browser's localStorage for the 'local' backend.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from utils.exceptions import PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)


class LocalStorage:
    """
    JSON-file key/value store rooted at a directory.

    Each key maps to ``<directory>/<key>.json``. Writes go to a temporary
    file first and are then moved into place, so a reader never observes
    a half-written document.
    """

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[Any]:
        """
        Read and decode the document stored under `key`.

        Returns:
            The decoded JSON value, or None if the key has never been written.

        Raises:
            PersistenceError: If the file cannot be read or is not valid JSON.
        """
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read '{key}' from {path}: {e}")
            raise PersistenceError(f"Could not read '{key}': {e}") from e

    def set_item(self, key: str, value: Any) -> None:
        """
        Encode `value` as JSON and store it under `key`.

        Raises:
            PersistenceError: If the document cannot be written.
        """
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(value, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write '{key}' to {path}: {e}")
            raise PersistenceError(f"Could not write '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        """Delete the document stored under `key`, if any."""
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to remove '{key}': {e}")
            raise PersistenceError(f"Could not remove '{key}': {e}") from e

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))

    def clear(self) -> None:
        """Remove every document in the store."""
        for key in self.keys():
            self.remove_item(key)
        logger.info(f"Cleared local storage at {self.directory}")
