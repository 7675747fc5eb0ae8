"""Key-value storage backends for the persisted cart"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """Scoped get/set/remove storage keyed by string.

    ``get`` never raises on missing or malformed data; it returns the
    fallback instead. ``set`` and ``remove`` raise StorageError on failure.
    """

    def get(self, key: str, fallback: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """In-memory storage; values are kept JSON-encoded"""

    def __init__(self):
        self.values: dict[str, str] = {}

    def get(self, key: str, fallback: Any = None) -> Any:
        raw = self.values.get(key)
        if raw is None:
            return fallback
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding malformed value for key {key!r}")
            return fallback

    def set(self, key: str, value: Any) -> None:
        try:
            self.values[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot encode value for key {key!r}: {e}") from e

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """One JSON file per key inside a directory"""

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.directory / f"{safe}.json"

    def get(self, key: str, fallback: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return fallback
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return fallback

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            payload = json.dumps(value)
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot remove key {key!r}: {e}") from e
