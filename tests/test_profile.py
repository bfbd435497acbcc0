"""Mini README: Tests for the persisted user profile.

Ensures missing or damaged profiles fall back to the defaults and that the
avatar initials follow the first/last word rule.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fynov.storage import InMemoryBackend, JsonFileBackend, Profile, ProfileStore
from fynov.storage.profile import PROFILE_KEY, initials_for


def test_missing_profile_uses_defaults(profile_store: ProfileStore) -> None:
    assert profile_store.get() == Profile(name="User", email="email@example.com")


@pytest.mark.parametrize("blob", ["{broken", "[]", "null"])
def test_corrupt_profile_uses_defaults(blob: str) -> None:
    store = ProfileStore(InMemoryBackend({PROFILE_KEY: blob}))
    assert store.get() == Profile()


def test_profile_round_trip(profile_store: ProfileStore) -> None:
    profile_store.save(Profile(name="Ana Maria Souza", email="ana@example.com"))

    loaded = profile_store.get()

    assert loaded.name == "Ana Maria Souza"
    assert loaded.initials == "AS"


def test_failed_profile_write_is_not_raised() -> None:
    store = ProfileStore(InMemoryBackend(quota_bytes=5))
    store.save(Profile(name="Someone", email="someone@example.com"))
    assert store.get() == Profile()


@pytest.mark.parametrize(
    ("name", "expected"),
    [("", "U"), ("User", "U"), ("   ", "U"), ("carla", "C"), ("joão da silva", "JS")],
)
def test_initials(name: str, expected: str) -> None:
    assert initials_for(name) == expected


def test_undecodable_profile_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / f"{PROFILE_KEY}.json").write_bytes(b"{\xff\xfe")

    assert ProfileStore(JsonFileBackend(tmp_path)).get() == Profile()


def test_reset_restores_defaults(profile_store: ProfileStore) -> None:
    profile_store.save(Profile(name="Ana Souza", email="ana@example.com"))

    profile_store.reset()
    profile_store.reset()

    assert profile_store.get() == Profile()
