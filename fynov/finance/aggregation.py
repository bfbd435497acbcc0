"""Mini README: Stateless aggregation over snapshots of the record store.

Structure:
    * sum_for_month - total ``amount`` of the records dated inside a month.
    * percent_change - month-over-month variation with a defined zero baseline.
    * goal_progress_percent - clamped completion percentage for a goal.
    * is_favourable_change - income should grow, expenses should shrink.
    * sum_by_category / goals_almost_done / top_goals - dashboard and chart feeds.

Nothing here touches storage or markup. Callers pass in whatever the store
returned for the current request and render the numbers themselves.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from .records import DEFAULT_CATEGORY, Collection, GoalRecord, TransactionRecord
from .time_windows import MonthId

LOGGER = get_logger(__name__)

ALMOST_DONE_THRESHOLD = 50


@dataclass(slots=True)
class GoalProgress:
    """A goal paired with its derived completion percentage."""

    goal: GoalRecord
    percent: int


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties moving away from zero."""

    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def sum_for_month(records: Iterable[TransactionRecord], year: int, month: int) -> float:
    """Sum amounts of records dated in ``year``/``month`` (month is zero-based)."""

    month_id = MonthId(year, month)
    total = 0.0
    for record in records:
        occurred_on = record.occurred_on
        if occurred_on is None:
            if record.date:
                LOGGER.debug("Skipping record %s with unreadable date %r", record.id, record.date)
            continue
        if month_id.contains(occurred_on):
            total += record.amount or 0.0
    return total


def percent_change(current: float, previous: float) -> Optional[int]:
    """Return the rounded percent change, or ``None`` when it is undefined.

    A zero baseline reports ``100`` when something was earned or spent this
    month and ``None`` when both months are empty.
    """

    if previous == 0:
        return 100 if current > 0 else None
    return round_half_away_from_zero((current - previous) / previous * 100)


def goal_progress_percent(current: Optional[float], target: Optional[float]) -> int:
    """Completion percentage in ``[0, 100]``; zero when either side is missing."""

    if not current or not target:
        return 0
    percent = round_half_away_from_zero(current / target * 100)
    return max(0, min(100, percent))


def is_favourable_change(collection: Collection, percent: int) -> bool:
    """Tell whether a variation is good news for ``collection``."""

    if collection is Collection.INCOME:
        return percent >= 0
    if collection is Collection.EXPENSES:
        return percent <= 0
    raise ValueError(f"Variations are not defined for collection '{collection.value}'.")


def sum_by_category(records: Iterable[TransactionRecord]) -> Dict[str, float]:
    """Total amounts per category in first-seen order."""

    totals: Dict[str, float] = {}
    for record in records:
        category = record.category or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0.0) + (record.amount or 0.0)
    return totals


def with_progress(goals: Iterable[GoalRecord]) -> List[GoalProgress]:
    """Pair each goal with its completion percentage, keeping stored order."""

    return [GoalProgress(goal=goal, percent=goal_progress_percent(goal.current, goal.target)) for goal in goals]


def goals_almost_done(goals: Iterable[GoalRecord], limit: int) -> List[GoalProgress]:
    """Goals at or past the halfway mark, closest to completion first."""

    candidates = [entry for entry in with_progress(goals) if entry.percent >= ALMOST_DONE_THRESHOLD]
    candidates.sort(key=lambda entry: entry.percent, reverse=True)
    return candidates[:limit]


def top_goals(goals: Iterable[GoalRecord], limit: int) -> List[GoalProgress]:
    """The first ``limit`` goals in stored order."""

    return with_progress(goals)[:limit]
