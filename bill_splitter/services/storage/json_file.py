"""
JSON File Storage Implementation

DESIGN DECISION: The local store is a single JSON object on disk mapping
keys to string values. It plays the role of the browser's local storage:
1. No database or server needed
2. The file is human-readable and easy to reset (just delete it)
3. Values are opaque strings; encoding them is the caller's job

Writes go to a temporary file that is then renamed over the original, so
an interrupted write never leaves a half-written store behind.

TRADEOFFS:
- Every write rewrites the whole file (fine for a participant list)
- No locking; the app has a single writer
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from bill_splitter.config import get_settings
from bill_splitter.services.storage.interface import (
    CorruptValueError,
    KeyValueStore,
    StorageError,
    StorageWriteError,
)

_FILE_KEY = "<file>"


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as one JSON object file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Args:
            path: Location of the JSON file. Defaults to the configured
                  storage path. The file and its directory are created on
                  the first write.
        """
        self._path = Path(path) if path is not None else get_settings().storage.path

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the whole store; a missing file is an empty store."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Cannot read {self._path}: {e}")

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptValueError(_FILE_KEY, str(e))

        if not isinstance(data, dict):
            raise CorruptValueError(_FILE_KEY, "top-level value is not an object")

        # Values must be strings; anything else was not written by us
        return {
            str(key): value
            for key, value in data.items()
            if isinstance(value, str)
        }

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                dir=self._path.parent,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Cannot write {self._path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except CorruptValueError:
            # An unreadable file is replaced rather than blocking every write
            data = {}
        data[key] = value
        self._write_all(data)
