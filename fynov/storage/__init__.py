"""Mini README: Persistence layer for FyNov.

The ``backends`` module moves JSON text in and out of a string-keyed store,
``record_store`` layers the collection CRUD on top and ``profile`` keeps the
single user profile. Stores take their backend as a constructor argument so
tests and the web app can swap in an in-memory backend.
"""

from .backends import (
    InMemoryBackend,
    JsonFileBackend,
    KeyValueBackend,
    StorageError,
    StorageQuotaExceeded,
    create_backend,
)
from .profile import Profile, ProfileStore
from .record_store import RecordStore

__all__ = [
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueBackend",
    "Profile",
    "ProfileStore",
    "RecordStore",
    "StorageError",
    "StorageQuotaExceeded",
    "create_backend",
]
