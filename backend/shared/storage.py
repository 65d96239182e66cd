"""
Durable key-value storage.

Plays the role browser localStorage plays for the web client: a flat
string-to-string map that survives process restarts. Values are opaque
strings; callers serialize their own payloads.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from .exceptions import StorageError

logger = logging.getLogger(__name__)


@runtime_checkable
class IKeyValueStore(Protocol):
    """Interface for durable string key-value storage."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the value could not be persisted
        """
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        ...


class InMemoryStore(IKeyValueStore):
    """Process-local store. Used in tests and for throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(IKeyValueStore):
    """
    Store backed by a single JSON object on disk.

    The whole file is rewritten on every mutation. An unreadable file is
    treated as empty so a corrupt store never blocks startup.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store at {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring non-object store at {self._path}")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as e:
            logger.error(f"Failed to write store at {self._path}: {e}")
            raise StorageError(f"Could not save to {self._path}", path=str(self._path)) from e

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
