"""Mini README: Single user profile persisted next to the collections.

Structure:
    * Profile - dataclass with the display name and e-mail.
    * ProfileStore - read/write the profile, falling back to defaults.
    * initials_for - avatar initials derived from a display name.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass

from ..logging_utils import get_logger
from .backends import KeyValueBackend, StorageError

LOGGER = get_logger(__name__)

PROFILE_KEY = "fynov_user"
DEFAULT_NAME = "User"
DEFAULT_EMAIL = "email@example.com"


@dataclass(slots=True)
class Profile:
    """Display details shown in the top bar and profile menu."""

    name: str = DEFAULT_NAME
    email: str = DEFAULT_EMAIL

    @property
    def initials(self) -> str:
        return initials_for(self.name)


def initials_for(name: str) -> str:
    """First and last initials, or the first letter of a single name."""

    if not name or name == DEFAULT_NAME:
        return "U"
    parts = name.split()
    if not parts:
        return "U"
    if len(parts) >= 2:
        return (parts[0][0] + parts[-1][0]).upper()
    return parts[0][0].upper()


class ProfileStore:
    """Persist the profile object under ``PROFILE_KEY``."""

    def __init__(self, backend: KeyValueBackend) -> None:
        self.backend = backend

    def get(self) -> Profile:
        """Return the stored profile, or the defaults when absent or damaged."""

        try:
            raw = self.backend.get_item(PROFILE_KEY)
        except StorageError as error:
            LOGGER.error("Stored profile could not be read, using defaults: %s", error)
            return Profile()
        if raw is None:
            return Profile()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as error:
            LOGGER.error("Stored profile is invalid JSON, using defaults: %s", error)
            return Profile()
        if not isinstance(payload, dict):
            LOGGER.error("Stored profile is not a JSON object, using defaults")
            return Profile()
        return Profile(
            name=str(payload.get("name") or DEFAULT_NAME),
            email=str(payload.get("email") or DEFAULT_EMAIL),
        )

    def reset(self) -> None:
        """Forget the stored profile so the defaults apply again."""

        try:
            self.backend.remove_item(PROFILE_KEY)
        except StorageError as error:
            LOGGER.error("Failed to remove stored profile: %s", error)

    def save(self, profile: Profile) -> None:
        """Write the profile; failures are logged and not raised."""

        try:
            self.backend.set_item(PROFILE_KEY, json.dumps(asdict(profile)))
        except (StorageError, OSError) as error:
            LOGGER.error("Failed to persist profile: %s", error)
            return
        LOGGER.info("Saved profile for %s", profile.name)
