"""Mini README: Calendar month helpers used to window the aggregations.

Structure:
    * MonthId - (year, zero-based month) pair used as a filter key.
    * current_month / previous_month - the two months compared on every page.
    * trailing_months - oldest-first sequence of the last ``n`` months with labels.

Every helper accepts an optional ``today`` so callers and tests can pin the
clock; otherwise the local wall clock is read at call time.
"""

from __future__ import annotations

from datetime import date
from typing import List, NamedTuple, Optional, Tuple

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


class MonthId(NamedTuple):
    """Calendar month with ``month`` in ``[0, 11]``."""

    year: int
    month: int

    def shifted(self, months: int) -> "MonthId":
        """Return the month ``months`` steps away, rolling across years."""

        index = self.year * 12 + self.month + months
        return MonthId(index // 12, index % 12)

    def contains(self, day: date) -> bool:
        """Tell whether ``day`` falls inside this month."""

        return day.year == self.year and day.month - 1 == self.month


def _today(today: Optional[date]) -> date:
    return today if today is not None else date.today()


def current_month(today: Optional[date] = None) -> MonthId:
    """Return the month containing ``today``."""

    now = _today(today)
    return MonthId(now.year, now.month - 1)


def previous_month(today: Optional[date] = None) -> MonthId:
    """Return the calendar month before the current one."""

    return current_month(today).shifted(-1)


def month_label(month_id: MonthId) -> str:
    """Short display label such as ``"Mar 2024"``."""

    return f"{MONTH_ABBREVIATIONS[month_id.month]} {month_id.year}"


def trailing_months(n: int, today: Optional[date] = None) -> List[Tuple[MonthId, str]]:
    """Return the last ``n`` months, oldest first, ending at the current month."""

    anchor = current_month(today)
    months: List[Tuple[MonthId, str]] = []
    for offset in range(n - 1, -1, -1):
        month_id = anchor.shifted(-offset)
        months.append((month_id, month_label(month_id)))
    return months
