"""Key-value persistence collaborators used by backend repositories only.

Values are JSON-compatible structures (lists, dicts, strings, numbers). A key
that was never written loads as ``None``, which callers must distinguish from a
stored empty collection.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from shared.config import DEFAULT_STORAGE_MAX_BYTES, DEFAULT_STORAGE_PREFIX


logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage collaborator cannot complete a read or write."""


class StorageQuotaExceededError(StorageError):
    """Raised when a serialized payload exceeds the configured capacity."""


class CorruptPayloadError(StorageError):
    """Raised when a stored payload cannot be decoded."""


class KeyValueStorage(Protocol):
    def load(self, key: str) -> Any | None:
        """Return the stored value, or None when the key was never written."""

    def save(self, key: str, value: Any) -> None:
        """Replace the stored value in one all-or-nothing write."""

    def clear(self, key: str) -> None:
        """Remove the stored value; clearing a missing key is not an error."""


def _serialize(key: str, value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Value for key '{key}' is not JSON serializable: {exc}") from exc


class InMemoryStorage:
    """Dict-backed storage used by tests/dev."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._values[key] = _serialize(key, value)

    def load(self, key: str) -> Any | None:
        raw_value = self._values.get(key)
        if raw_value is None:
            return None
        try:
            return json.loads(raw_value)
        except json.JSONDecodeError as exc:
            raise CorruptPayloadError(f"Stored value for key '{key}' is not valid JSON") from exc

    def save(self, key: str, value: Any) -> None:
        self._values[key] = _serialize(key, copy.deepcopy(value))

    def clear(self, key: str) -> None:
        self._values.pop(key, None)

    def write_raw(self, key: str, raw_value: str) -> None:
        """Store an undecoded payload as-is (used to simulate corrupt data)."""
        self._values[key] = raw_value

    def keys(self) -> list[str]:
        return sorted(self._values)


@dataclass(slots=True)
class StorageSettings:
    directory: str
    prefix: str = DEFAULT_STORAGE_PREFIX
    max_bytes: int = DEFAULT_STORAGE_MAX_BYTES


class JsonFileStorage:
    """One JSON file per key under a directory, written atomically."""

    def __init__(self, settings: StorageSettings) -> None:
        self.settings = settings
        self._directory = Path(settings.directory)

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{self.settings.prefix}{key}.json"

    def load(self, key: str) -> Any | None:
        path = self._path_for(key)
        try:
            raw_value = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise CorruptPayloadError(f"Stored value for key '{key}' is not valid UTF-8") from exc
        except OSError as exc:
            raise StorageError(f"Failed to read key '{key}' from {path}: {exc}") from exc

        try:
            return json.loads(raw_value)
        except json.JSONDecodeError as exc:
            raise CorruptPayloadError(f"Stored value for key '{key}' is not valid JSON") from exc

    def save(self, key: str, value: Any) -> None:
        payload = _serialize(key, value).encode("utf-8")
        if len(payload) > self.settings.max_bytes:
            raise StorageQuotaExceededError(
                f"Value for key '{key}' is {len(payload)} bytes, limit is {self.settings.max_bytes}"
            )

        path = self._path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            file_descriptor, temp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(file_descriptor, "wb") as handle:
                    handle.write(payload)
                os.replace(temp_name, path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write key '{key}' to {path}: {exc}") from exc

        logger.debug("storage_saved key=%s bytes=%s path=%s", key, len(payload), path)

    def clear(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to clear key '{key}' at {path}: {exc}") from exc

    def keys(self) -> list[str]:
        if not self._directory.exists():
            return []
        prefix = self.settings.prefix
        return sorted(
            path.name[len(prefix) : -len(".json")]
            for path in self._directory.glob(f"{prefix}*.json")
            if path.is_file()
        )
