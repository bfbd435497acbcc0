"""Mini README: Key-value backends holding the persisted JSON text.

Structure:
    * StorageError / StorageQuotaExceeded - write failures raised by backends.
    * KeyValueBackend - abstract string-keyed, string-valued synchronous store.
    * InMemoryBackend - dictionary backend with an optional byte quota.
    * JsonFileBackend - one ``<key>.json`` file per key inside a directory.
    * create_backend - pick a backend from the configured settings.

Backends know nothing about records; they move opaque text in and out. The
record and profile stores above them decide how to parse it and how to
recover when it is damaged.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Optional

from ..configuration import FynovSettings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageError(Exception):
    """Raised when a backend cannot persist a value."""


class StorageQuotaExceeded(StorageError):
    """Raised when a write would exceed the backend's capacity."""


class KeyValueBackend(ABC):
    """Base interface for persistent string key-value stores."""

    backend_name: str = "generic"

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored text for ``key`` or ``None`` when absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous text."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Forget ``key``; absent keys are ignored."""

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """Return the keys currently stored."""


class InMemoryBackend(KeyValueBackend):
    """Process-local dictionary backend, handy for tests and demos."""

    backend_name = "memory"

    def __init__(
        self,
        initial: Optional[Dict[str, str]] = None,
        *,
        quota_bytes: Optional[int] = None,
    ) -> None:
        self._items: Dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes

    def _size_with(self, key: str, value: str) -> int:
        sizes = {k: len(k) + len(v) for k, v in self._items.items()}
        sizes[key] = len(key) + len(value)
        return sum(sizes.values())

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None and self._size_with(key, value) > self.quota_bytes:
            raise StorageQuotaExceeded(
                f"Writing '{key}' would exceed the {self.quota_bytes} byte quota"
            )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> Iterable[str]:
        return sorted(self._items.keys())


class JsonFileBackend(KeyValueBackend):
    """Persist each key as a UTF-8 ``.json`` file inside ``directory``."""

    backend_name = "file"

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("JSON file backend rooted at %s", self.directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise KeyError(f"Storage key '{key}' contains unsupported characters")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise StorageError(f"Unable to read '{key}' from {path}: {error}") from error

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        temporary = path.with_suffix(".json.tmp")
        try:
            temporary.write_text(value, encoding="utf-8")
            temporary.replace(path)
        except OSError as error:
            raise StorageError(f"Unable to write '{key}' to {path}: {error}") from error

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as error:
            raise StorageError(f"Unable to remove '{key}' at {path}: {error}") from error

    def keys(self) -> Iterable[str]:
        return sorted(path.stem for path in self.directory.glob("*.json"))


def create_backend(settings: FynovSettings) -> KeyValueBackend:
    """Instantiate the backend selected by ``settings.storage_backend``."""

    if settings.storage_backend == "memory":
        LOGGER.warning("Using in-memory storage; records will not survive a restart")
        return InMemoryBackend()
    LOGGER.info("Using JSON file storage in %s", settings.data_directory)
    return JsonFileBackend(settings.data_directory)
