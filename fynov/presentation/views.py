"""Mini README: View models and markup rendering for FyNov pages.

Structure:
    * TransactionRow / GoalCard - per-record display models, newest first.
    * MotivationalTier - message shown on a goal card for its progress band.
    * MonthComparison - current vs previous month block of a transaction page.
    * DashboardSummary - balance, badges and goal highlights for the home page.
    * ViewRenderer - Jinja2 environment shared with the web app, plus
      ``render_collection`` which produces the list markup for a collection.

Builders recompute everything from the records they are handed; nothing is
cached between renders. Text coming from users is escaped by the ``display``
filter inside the templates, never by the builders.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..finance.aggregation import (
    GoalProgress,
    goals_almost_done,
    is_favourable_change,
    percent_change,
    sum_for_month,
    top_goals,
    with_progress,
)
from ..finance.records import DEFAULT_CATEGORY, Collection, GoalRecord, Record, TransactionRecord
from ..finance.time_windows import current_month, previous_month
from ..logging_utils import get_logger
from .formatting import CurrencyFormatter, escape_for_display, format_amount_input, format_date

LOGGER = get_logger(__name__)

TEMPLATE_DIRECTORY = Path(__file__).resolve().parent.parent / "interface" / "templates"
DASHBOARD_GOAL_LIMIT = 3
NEUTRAL = "neutral"
POSITIVE = "positive"
NEGATIVE = "negative"


@dataclass(frozen=True, slots=True)
class MotivationalTier:
    threshold: int
    message: str
    css_class: str
    icon: str


MOTIVATIONAL_TIERS = (
    MotivationalTier(100, "Goal reached!", "goal-message--done", "fa-trophy"),
    MotivationalTier(80, "Almost there! Final stretch!", "goal-message--close", "fa-fire"),
    MotivationalTier(50, "Good pace! Keep it up.", "goal-message--good", "fa-star"),
    MotivationalTier(25, "Good start!", "goal-message--start", "fa-seedling"),
    MotivationalTier(0, "You can do it!", "goal-message--go", "fa-hand-point-right"),
)


def motivational_tier(percent: int) -> MotivationalTier:
    """Return the highest tier whose threshold ``percent`` has reached."""

    for tier in MOTIVATIONAL_TIERS:
        if percent >= tier.threshold:
            return tier
    return MOTIVATIONAL_TIERS[-1]


def card_tone(percent: int) -> str:
    if percent >= 100:
        return "done"
    if percent >= 50:
        return "close"
    return "started"


def signed_percent(percent: int) -> str:
    return f"{'+' if percent >= 0 else ''}{percent}%"


@dataclass(slots=True)
class TransactionRow:
    id: int
    description: str
    date_text: str
    category: str
    amount_text: str


@dataclass(slots=True)
class GoalCard:
    id: int
    title: str
    percent: int
    current_text: str
    target_text: str
    deadline_text: str
    tone: str
    tier: MotivationalTier


@dataclass(slots=True)
class MonthComparison:
    """Totals for the current and previous month with the variation label."""

    collection: Collection
    current_total: float
    previous_total: float
    current_text: str
    previous_text: str
    percent: Optional[int]
    variation_text: str
    tone: str


@dataclass(slots=True)
class SummaryBadge:
    text: str
    tone: str
    phrase: str


@dataclass(slots=True)
class DashboardSummary:
    """Everything the dashboard shows for the current month."""

    balance: float
    income_total: float
    expense_total: float
    balance_text: str
    income_text: str
    expense_text: str
    income_badge: Optional[SummaryBadge]
    expense_badge: Optional[SummaryBadge]
    almost_done_goals: List[GoalCard] = field(default_factory=list)
    top_goals: List[GoalCard] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        payload = asdict(self)
        for key in ("almost_done_goals", "top_goals"):
            for card in payload[key]:
                card["tier"] = card["tier"]["message"]
        return payload


def transaction_rows(records: Sequence[TransactionRecord], formatter: CurrencyFormatter) -> List[TransactionRow]:
    """Table rows, most recently added first."""

    return [
        TransactionRow(
            id=record.id,
            description=record.description,
            date_text=format_date(record.date),
            category=record.category or DEFAULT_CATEGORY,
            amount_text=formatter(record.amount or 0),
        )
        for record in reversed(records)
    ]


def _goal_card(progress: GoalProgress, formatter: CurrencyFormatter, *, no_deadline: str) -> GoalCard:
    goal = progress.goal
    return GoalCard(
        id=goal.id,
        title=goal.title,
        percent=progress.percent,
        current_text=formatter(goal.current or 0),
        target_text=formatter(goal.target),
        deadline_text=format_date(goal.deadline, empty=goal.deadline or no_deadline),
        tone=card_tone(progress.percent),
        tier=motivational_tier(progress.percent),
    )


def goal_cards(goals: Sequence[GoalRecord], formatter: CurrencyFormatter) -> List[GoalCard]:
    """Goal cards, most recently added first."""

    return [
        _goal_card(progress, formatter, no_deadline="-")
        for progress in with_progress(reversed(goals))
    ]


def month_comparison(
    collection: Collection,
    records: Sequence[TransactionRecord],
    formatter: CurrencyFormatter,
    today: Optional[date] = None,
) -> MonthComparison:
    """Compare this month's total with last month's for one collection.

    Two empty months read as "—", growth from an empty month reads as
    "+100%"; both are shown without a good/bad tone.
    """

    current = current_month(today)
    previous = previous_month(today)
    current_total = sum_for_month(records, current.year, current.month)
    previous_total = sum_for_month(records, previous.year, previous.month)
    percent = percent_change(current_total, previous_total)

    if percent is None:
        variation_text, tone = "—", NEUTRAL
    elif previous_total == 0:
        variation_text, tone = "+100%", NEUTRAL
    else:
        variation_text = signed_percent(percent)
        tone = POSITIVE if is_favourable_change(collection, percent) else NEGATIVE

    return MonthComparison(
        collection=collection,
        current_total=current_total,
        previous_total=previous_total,
        current_text=formatter(current_total),
        previous_text=formatter(previous_total),
        percent=percent,
        variation_text=variation_text,
        tone=tone,
    )


def _summary_badge(collection: Collection, current: float, previous: float) -> Optional[SummaryBadge]:
    """Badge for the dashboard, only when last month has something to compare."""

    percent = percent_change(current, previous)
    if percent is None or previous <= 0:
        return None
    favourable = is_favourable_change(collection, percent)
    if favourable:
        phrase = "Better than last month"
    elif collection is Collection.INCOME:
        phrase = "Lower than last month"
    else:
        phrase = "Higher than last month"
    text = signed_percent(percent)
    return SummaryBadge(text=text, tone=POSITIVE if favourable else NEGATIVE, phrase=f"{phrase} ({text})")


def dashboard_summary(
    income: Sequence[TransactionRecord],
    expenses: Sequence[TransactionRecord],
    goals: Sequence[GoalRecord],
    formatter: CurrencyFormatter,
    today: Optional[date] = None,
) -> DashboardSummary:
    """Aggregate the dashboard from fresh snapshots of every collection."""

    current = current_month(today)
    previous = previous_month(today)
    income_now = sum_for_month(income, current.year, current.month)
    income_before = sum_for_month(income, previous.year, previous.month)
    expenses_now = sum_for_month(expenses, current.year, current.month)
    expenses_before = sum_for_month(expenses, previous.year, previous.month)
    balance = income_now - expenses_now
    LOGGER.debug(
        "Dashboard totals -> income: %.2f expenses: %.2f balance: %.2f",
        income_now,
        expenses_now,
        balance,
    )

    return DashboardSummary(
        balance=balance,
        income_total=income_now,
        expense_total=expenses_now,
        balance_text=formatter(balance),
        income_text=formatter(income_now),
        expense_text=formatter(expenses_now),
        income_badge=_summary_badge(Collection.INCOME, income_now, income_before),
        expense_badge=_summary_badge(Collection.EXPENSES, expenses_now, expenses_before),
        almost_done_goals=[
            _goal_card(progress, formatter, no_deadline="No deadline")
            for progress in goals_almost_done(goals, DASHBOARD_GOAL_LIMIT)
        ],
        top_goals=[
            _goal_card(progress, formatter, no_deadline="No deadline")
            for progress in top_goals(goals, DASHBOARD_GOAL_LIMIT)
        ],
    )


class ViewRenderer:
    """Own the Jinja2 environment and render collection markup."""

    def __init__(
        self,
        formatter: Optional[CurrencyFormatter] = None,
        *,
        template_directory: Path = TEMPLATE_DIRECTORY,
    ) -> None:
        self.formatter = formatter or CurrencyFormatter()
        self.environment = Environment(
            loader=FileSystemLoader(str(template_directory)),
            autoescape=select_autoescape(["html"]),
        )
        self.environment.filters["currency"] = self.formatter
        self.environment.filters["display"] = escape_for_display
        self.environment.filters["short_date"] = format_date
        self.environment.filters["amount_input"] = format_amount_input
        self.environment.globals["signed_percent"] = signed_percent

    def collection_context(self, collection: Collection, records: Sequence[Record]) -> Dict[str, object]:
        """Template variables for the list partial of ``collection``."""

        if collection is Collection.GOALS:
            return {"collection": collection.value, "cards": goal_cards(records, self.formatter)}  # type: ignore[arg-type]
        return {"collection": collection.value, "rows": transaction_rows(records, self.formatter)}  # type: ignore[arg-type]

    def render_collection(self, collection: Collection, records: Sequence[Record]) -> str:
        """Render the table or card grid for ``collection`` (or its empty state)."""

        template_name = "partials/goal_cards.html" if collection is Collection.GOALS else "partials/transaction_table.html"
        template = self.environment.get_template(template_name)
        return template.render(**self.collection_context(collection, records))
