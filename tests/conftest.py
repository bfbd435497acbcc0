"""Pytest configuration for test isolation.

Settings are cached process-wide by ``get_settings`` and the default JSON file
backend writes into ``./data``. Each test gets its own data directory and an
in-memory backend so nothing leaks between tests or into the working tree.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest

from fynov.configuration import get_settings
from fynov.storage import InMemoryBackend, ProfileStore, RecordStore


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point the data directory at a per-test folder and reset cached settings."""

    monkeypatch.setenv("FYNOV_DATA_DIRECTORY", os.fspath(tmp_path / "data"))
    monkeypatch.setenv("FYNOV_STORAGE_BACKEND", "memory")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture()
def store(backend: InMemoryBackend) -> RecordStore:
    return RecordStore(backend)


@pytest.fixture()
def profile_store(backend: InMemoryBackend) -> ProfileStore:
    return ProfileStore(backend)
