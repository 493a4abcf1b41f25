"""
JSON-file backed client storage.

The whole store is one JSON object of string keys to string values. It is
re-read on every ``get_item`` so that several processes sharing the file see
each other's writes.
"""

import json
import logging
import os
from pathlib import Path

from betportal.shared.exceptions import StorageError, StorageUnavailableError
from betportal.storage.interface import ClientStorage

logger = logging.getLogger(__name__)


class FileStorage(ClientStorage):
    """Persist items to a JSON file on the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise StorageUnavailableError(
                f"Storage file is not accessible: {e}",
                details={"path": str(self._path)},
            ) from e
        except OSError as e:
            raise StorageError(
                f"Cannot read storage file: {e}",
                details={"path": str(self._path)},
            ) from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(
                "Storage file is not valid JSON",
                details={"path": str(self._path), "error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise StorageError(
                "Storage file must contain a JSON object",
                details={"path": str(self._path)},
            )
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _dump(self, data: dict[str, str]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageError(
                f"Cannot write storage file: {e}",
                details={"path": str(self._path)},
            ) from e

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)
        logger.debug("File storage: item set", extra={"key": key, "path": str(self._path)})

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._dump(data)
