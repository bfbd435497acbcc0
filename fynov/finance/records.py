"""Mini README: Typed records for the income, expense and goal collections.

Structure:
    * Collection - enum naming the persisted collections (also their storage keys).
    * TransactionRecord - dataclass for income and expense entries.
    * GoalRecord - dataclass for savings goals.
    * coerce_fields / record_from_dict - boundary coercion used by the store.

Persisted blobs are plain JSON objects. The store runs every payload through
``coerce_fields`` before writing and through ``record_from_dict`` when
reading, so the rest of the application only ever sees typed records with
numeric amounts. Dates stay as the text the user entered; ``parse_date``
turns them into ``date`` objects on demand and answers ``None`` for anything
it cannot read.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Mapping, Optional, Union

DEFAULT_CATEGORY = "Other"


class Collection(str, Enum):
    """Enumerate the persisted record collections."""

    INCOME = "income"
    EXPENSES = "expenses"
    GOALS = "goals"

    @classmethod
    def from_str(cls, value: str) -> "Collection":
        """Coerce arbitrary casing into a known collection."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise KeyError(f"Unknown collection: {value}") from error

    @property
    def is_transactional(self) -> bool:
        return self is not Collection.GOALS


@dataclass(slots=True)
class TransactionRecord:
    """Income or expense entry as persisted in a transaction collection."""

    id: int
    description: str
    amount: float
    date: str = ""
    category: str = DEFAULT_CATEGORY

    @property
    def occurred_on(self) -> Optional[date]:
        return parse_date(self.date)

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(slots=True)
class GoalRecord:
    """Savings goal. Progress is derived from ``current`` and ``target``."""

    id: int
    title: str
    target: float
    current: float = 0.0
    deadline: str = ""

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


Record = Union[TransactionRecord, GoalRecord]

_NUMERIC_FIELDS = {"amount", "target", "current"}
_TEXT_FIELDS = {"description", "category", "date", "title", "deadline"}


def parse_date(value: object) -> Optional[date]:
    """Parse ISO formatted strings or date objects, ``None`` when unreadable."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def to_number(value: object) -> float:
    """Coerce a stored numeric field to ``float``; blanks count as zero."""

    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValueError("Booleans are not valid amounts.")
    number = float(value)  # type: ignore[arg-type]
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"Amount must be a finite number, got {value!r}.")
    return number


def coerce_fields(fields: Mapping[str, object]) -> Dict[str, object]:
    """Validate and coerce a record payload before it is written.

    Numeric fields become floats and known text fields become strings. Unknown
    keys are carried through untouched so extra metadata survives a round trip.
    """

    coerced: Dict[str, object] = {}
    for key, value in fields.items():
        if key in _NUMERIC_FIELDS:
            try:
                coerced[key] = to_number(value)
            except (TypeError, ValueError) as error:
                raise ValueError(f"Field '{key}' must be numeric, got {value!r}.") from error
        elif key in _TEXT_FIELDS:
            coerced[key] = "" if value is None else str(value)
        elif key == "id":
            coerced[key] = int(value)  # type: ignore[arg-type]
        else:
            coerced[key] = value
    return coerced


def record_from_dict(collection: Collection, payload: Mapping[str, object]) -> Record:
    """Build the typed record for ``collection`` from a persisted object."""

    data = coerce_fields(payload)
    if "id" not in data:
        raise ValueError("Persisted records must carry an id.")
    if collection is Collection.GOALS:
        return GoalRecord(
            id=data["id"],  # type: ignore[arg-type]
            title=str(data.get("title", "")),
            target=float(data.get("target", 0.0)),  # type: ignore[arg-type]
            current=float(data.get("current", 0.0)),  # type: ignore[arg-type]
            deadline=str(data.get("deadline", "")),
        )
    return TransactionRecord(
        id=data["id"],  # type: ignore[arg-type]
        description=str(data.get("description", "")),
        amount=float(data.get("amount", 0.0)),  # type: ignore[arg-type]
        date=str(data.get("date", "")),
        category=str(data.get("category") or DEFAULT_CATEGORY),
    )
