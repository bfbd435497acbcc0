"""Mini README: Form controller turning submitted fields into store calls.

Structure:
    * FormValidationError - raised with the alert text shown to the user.
    * parse_amount - read amounts typed as ``12,50`` or ``1.234,56``.
    * FormController - validate, normalise and dispatch create/update/delete.

Validation happens here, before the store is touched. The web layer catches
``FormValidationError`` and re-renders the page with a blocking alert; every
successful mutation ends in a redirect so the page re-aggregates from the
store.
"""

from __future__ import annotations

import re
from typing import Optional

from ..finance.records import DEFAULT_CATEGORY, Collection, GoalRecord, Record, TransactionRecord, parse_date
from ..logging_utils import get_logger
from ..storage import Profile, ProfileStore, RecordStore
from ..storage.profile import DEFAULT_EMAIL, DEFAULT_NAME

LOGGER = get_logger(__name__)

TRANSACTION_REQUIRED = "Fill in description and amount."
GOAL_REQUIRED = "Fill in title and target amount."
INVALID_DATE = "Dates must use the YYYY-MM-DD format."
INVALID_CONTRIBUTION = "Enter a positive amount to add to the goal."

_GROUPED_AMOUNT = re.compile(r"^\d{1,3}(\.\d{3})+(,\d+)?$")


class FormValidationError(ValueError):
    """User input that cannot be stored; the message is shown verbatim."""


def parse_amount(raw: Optional[str]) -> float:
    """Parse a typed amount, accepting comma decimals; blanks read as zero."""

    text = (raw or "").strip().replace(" ", "")
    if not text:
        return 0.0
    if _GROUPED_AMOUNT.match(text):
        text = text.replace(".", "")
    text = text.replace(",", ".")
    try:
        return float(text)
    except ValueError:
        return 0.0


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _checked_date(value: Optional[str]) -> str:
    text = _clean(value)
    if text and parse_date(text) is None:
        raise FormValidationError(INVALID_DATE)
    return text


class FormController:
    """Validate submitted forms and apply them to the stores."""

    def __init__(self, record_store: RecordStore, profile_store: Optional[ProfileStore] = None) -> None:
        self.record_store = record_store
        self.profile_store = profile_store

    @staticmethod
    def _transaction_collection(collection: Collection) -> Collection:
        if not collection.is_transactional:
            raise KeyError(f"'{collection.value}' does not hold transactions")
        return collection

    def _transaction_fields(
        self,
        *,
        description: Optional[str],
        amount: Optional[str],
        date: Optional[str],
        category: Optional[str],
    ) -> dict:
        cleaned_description = _clean(description)
        parsed_amount = parse_amount(amount)
        if not cleaned_description or parsed_amount <= 0:
            raise FormValidationError(TRANSACTION_REQUIRED)
        return {
            "date": _checked_date(date),
            "description": cleaned_description,
            "amount": parsed_amount,
            "category": _clean(category) or DEFAULT_CATEGORY,
        }

    def add_transaction(
        self,
        collection: Collection,
        *,
        description: Optional[str],
        amount: Optional[str],
        date: Optional[str] = None,
        category: Optional[str] = None,
    ) -> TransactionRecord:
        """Create an income or expense entry from form fields."""

        fields = self._transaction_fields(
            description=description, amount=amount, date=date, category=category
        )
        record = self.record_store.create(self._transaction_collection(collection), fields)
        return record  # type: ignore[return-value]

    def edit_transaction(
        self,
        collection: Collection,
        record_id: Optional[int],
        *,
        description: Optional[str],
        amount: Optional[str],
        date: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Optional[TransactionRecord]:
        """Overwrite an entry with the edited form fields."""

        if record_id is None:
            raise FormValidationError("Could not identify the item being edited.")
        fields = self._transaction_fields(
            description=description, amount=amount, date=date, category=category
        )
        return self.record_store.update(self._transaction_collection(collection), record_id, fields)  # type: ignore[return-value]

    def _goal_fields(
        self,
        *,
        title: Optional[str],
        target: Optional[str],
        deadline: Optional[str],
    ) -> dict:
        cleaned_title = _clean(title)
        parsed_target = parse_amount(target)
        if not cleaned_title or parsed_target <= 0:
            raise FormValidationError(GOAL_REQUIRED)
        return {"title": cleaned_title, "target": parsed_target, "deadline": _checked_date(deadline)}

    def add_goal(
        self,
        *,
        title: Optional[str],
        target: Optional[str],
        deadline: Optional[str] = None,
    ) -> GoalRecord:
        """Create a goal with nothing saved towards it yet."""

        fields = self._goal_fields(title=title, target=target, deadline=deadline)
        fields["current"] = 0.0
        return self.record_store.create(Collection.GOALS, fields)  # type: ignore[return-value]

    def edit_goal(
        self,
        record_id: int,
        *,
        title: Optional[str],
        target: Optional[str],
        deadline: Optional[str] = None,
        current: Optional[str] = None,
    ) -> Optional[GoalRecord]:
        """Update a goal's definition and, when given, the amount saved."""

        fields = self._goal_fields(title=title, target=target, deadline=deadline)
        if _clean(current):
            saved = parse_amount(current)
            if saved < 0:
                raise FormValidationError("The saved amount cannot be negative.")
            fields["current"] = saved
        return self.record_store.update(Collection.GOALS, record_id, fields)  # type: ignore[return-value]

    def contribute_to_goal(self, record_id: int, *, amount: Optional[str]) -> Optional[GoalRecord]:
        """Add ``amount`` to what has been saved towards a goal."""

        contribution = parse_amount(amount)
        if contribution <= 0:
            raise FormValidationError(INVALID_CONTRIBUTION)
        goal = self.record_store.get_by_id(Collection.GOALS, record_id)
        if goal is None:
            LOGGER.warning("Contribution for unknown goal %s ignored", record_id)
            return None
        return self.record_store.update(  # type: ignore[return-value]
            Collection.GOALS, record_id, {"current": goal.current + contribution}  # type: ignore[union-attr]
        )

    def delete(self, collection: Collection, record_id: int) -> None:
        """Remove a record; unknown ids are a logged no-op in the store."""

        self.record_store.delete(collection, record_id)

    def get(self, collection: Collection, record_id: int) -> Optional[Record]:
        return self.record_store.get_by_id(collection, record_id)

    def save_profile(self, *, name: Optional[str], email: Optional[str]) -> Profile:
        """Persist the profile, falling back to defaults for blank fields."""

        if self.profile_store is None:
            raise RuntimeError("No profile store configured")
        profile = Profile(name=_clean(name) or DEFAULT_NAME, email=_clean(email) or DEFAULT_EMAIL)
        self.profile_store.save(profile)
        return profile
