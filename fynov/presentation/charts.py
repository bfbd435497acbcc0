"""Mini README: Chart.js configurations built from record snapshots.

Structure:
    * build_chart_configs - every chart the pages can show, keyed by canvas id.
    * evolution_chart / monthly_bar_chart / category_chart / comparison_chart -
      individual builders returning plain ``dict`` configs.

The browser only draws what it is given: ``static/js/charts.js`` fetches
``/api/charts`` and hands each config to ``new Chart(...)`` when a canvas
with the matching id exists on the page.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from ..finance.aggregation import sum_by_category, sum_for_month
from ..finance.records import TransactionRecord
from ..finance.time_windows import MonthId, current_month, month_label, previous_month, trailing_months

INCOME_COLOUR = "#00c853"
EXPENSE_COLOUR = "#ff5252"
CATEGORY_PALETTE = ["#00c853", "#ffb300", "#29b6f6", "#8e24aa", "#ff5252", "#9e9e9e"]
TRAILING_MONTHS = 6


def _monthly_totals(records: Sequence[TransactionRecord], months: Sequence[MonthId]) -> List[float]:
    return [sum_for_month(records, month.year, month.month) for month in months]


def evolution_chart(
    income: Sequence[TransactionRecord],
    expenses: Sequence[TransactionRecord],
    months: Sequence[Tuple[MonthId, str]],
) -> Dict[str, object]:
    """Line chart with income and expenses over the trailing months."""

    month_ids = [month for month, _ in months]
    return {
        "type": "line",
        "data": {
            "labels": [label for _, label in months],
            "datasets": [
                {
                    "label": "Income",
                    "data": _monthly_totals(income, month_ids),
                    "borderColor": INCOME_COLOUR,
                    "backgroundColor": "rgba(0,200,83,0.08)",
                    "tension": 0.3,
                },
                {
                    "label": "Expenses",
                    "data": _monthly_totals(expenses, month_ids),
                    "borderColor": EXPENSE_COLOUR,
                    "backgroundColor": "rgba(255,82,82,0.06)",
                    "tension": 0.3,
                },
            ],
        },
        "options": {"maintainAspectRatio": False, "plugins": {"legend": {"position": "top"}}},
    }


def monthly_bar_chart(
    label: str,
    records: Sequence[TransactionRecord],
    months: Sequence[Tuple[MonthId, str]],
    *,
    fill: str,
    border: str,
) -> Dict[str, object]:
    """Bar chart of one collection's monthly totals."""

    return {
        "type": "bar",
        "data": {
            "labels": [month_label_text for _, month_label_text in months],
            "datasets": [
                {
                    "label": label,
                    "data": _monthly_totals(records, [month for month, _ in months]),
                    "backgroundColor": fill,
                    "borderColor": border,
                    "borderWidth": 1,
                }
            ],
        },
        "options": {"maintainAspectRatio": False, "scales": {"y": {"beginAtZero": True}}},
    }


def category_chart(expenses: Sequence[TransactionRecord]) -> Dict[str, object]:
    """Doughnut of all-time expenses per category."""

    totals = sum_by_category(expenses)
    return {
        "type": "doughnut",
        "data": {
            "labels": list(totals.keys()),
            "datasets": [{"data": list(totals.values()), "backgroundColor": CATEGORY_PALETTE}],
        },
        "options": {"maintainAspectRatio": False, "plugins": {"legend": {"position": "right"}}},
    }


def comparison_chart(
    label: str,
    records: Sequence[TransactionRecord],
    today: Optional[date],
    *,
    fills: Tuple[str, str],
    borders: Tuple[str, str],
) -> Dict[str, object]:
    """Two bars: previous month against the current month."""

    previous = previous_month(today)
    current = current_month(today)
    return {
        "type": "bar",
        "data": {
            "labels": [month_label(previous), month_label(current)],
            "datasets": [
                {
                    "label": label,
                    "data": _monthly_totals(records, [previous, current]),
                    "backgroundColor": list(fills),
                    "borderColor": list(borders),
                    "borderWidth": 1,
                }
            ],
        },
        "options": {"maintainAspectRatio": False, "scales": {"y": {"beginAtZero": True}}},
    }


def build_chart_configs(
    income: Sequence[TransactionRecord],
    expenses: Sequence[TransactionRecord],
    today: Optional[date] = None,
) -> Dict[str, Dict[str, object]]:
    """Return every chart config keyed by the canvas id it targets."""

    months = trailing_months(TRAILING_MONTHS, today)
    return {
        "evolutionChart": evolution_chart(income, expenses, months),
        "incomeChart": monthly_bar_chart(
            "Income", income, months, fill="rgba(0, 200, 83, 0.6)", border=INCOME_COLOUR
        ),
        "expensesChart": monthly_bar_chart(
            "Expenses", expenses, months, fill="rgba(229, 57, 53, 0.6)", border="#e53935"
        ),
        "categoryChart": category_chart(expenses),
        "incomeComparisonChart": comparison_chart(
            "Income",
            income,
            today,
            fills=("rgba(0, 200, 83, 0.4)", "rgba(0, 200, 83, 0.8)"),
            borders=("#00a843", INCOME_COLOUR),
        ),
        "expensesComparisonChart": comparison_chart(
            "Expenses",
            expenses,
            today,
            fills=("rgba(229, 57, 53, 0.4)", "rgba(229, 57, 53, 0.8)"),
            borders=("#c62828", "#e53935"),
        ),
    }
