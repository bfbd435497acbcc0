"""Mini README: Presentation helpers for FyNov.

``formatting`` turns numbers and user text into display strings, ``charts``
builds Chart.js configurations and ``views`` assembles the view models and
markup the web interface renders.
"""

from .charts import build_chart_configs
from .formatting import CurrencyFormatter, escape_for_display, format_amount_input, format_currency, format_date
from .views import (
    DashboardSummary,
    MonthComparison,
    ViewRenderer,
    dashboard_summary,
    goal_cards,
    month_comparison,
    motivational_tier,
    transaction_rows,
)

__all__ = [
    "CurrencyFormatter",
    "DashboardSummary",
    "MonthComparison",
    "ViewRenderer",
    "build_chart_configs",
    "dashboard_summary",
    "escape_for_display",
    "format_amount_input",
    "format_currency",
    "format_date",
    "goal_cards",
    "month_comparison",
    "motivational_tier",
    "transaction_rows",
]
