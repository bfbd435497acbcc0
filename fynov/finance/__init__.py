"""Mini README: Finance domain for FyNov.

Groups the typed records persisted by the store, the calendar helpers that
window them into months, and the pure aggregation functions feeding the
dashboard, the month comparisons and the charts.
"""

from .aggregation import (
    GoalProgress,
    goal_progress_percent,
    goals_almost_done,
    is_favourable_change,
    percent_change,
    sum_by_category,
    sum_for_month,
    top_goals,
    with_progress,
)
from .records import Collection, GoalRecord, Record, TransactionRecord
from .time_windows import MonthId, current_month, month_label, previous_month, trailing_months

__all__ = [
    "Collection",
    "GoalProgress",
    "GoalRecord",
    "MonthId",
    "Record",
    "TransactionRecord",
    "current_month",
    "goal_progress_percent",
    "goals_almost_done",
    "is_favourable_change",
    "month_label",
    "percent_change",
    "previous_month",
    "sum_by_category",
    "sum_for_month",
    "top_goals",
    "trailing_months",
    "with_progress",
]
