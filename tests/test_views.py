"""Mini README: Tests for the view models and collection markup.

These tests confirm lists render newest first with escaped user text, empty
collections render the empty-state marker, goal cards pick the right
motivational tier, and the month comparison and dashboard keep the
three-way distinction for an empty previous month.
"""

from __future__ import annotations

from datetime import date

import pytest

from fynov.finance import Collection, GoalRecord, TransactionRecord
from fynov.presentation import (
    CurrencyFormatter,
    ViewRenderer,
    dashboard_summary,
    goal_cards,
    month_comparison,
    motivational_tier,
    transaction_rows,
)

TODAY = date(2024, 3, 15)
FORMATTER = CurrencyFormatter()


def _txn(record_id: int, day: str, amount: float, description: str = "Entry") -> TransactionRecord:
    return TransactionRecord(id=record_id, description=description, amount=amount, date=day)


@pytest.mark.parametrize("collection", [Collection.INCOME, Collection.EXPENSES, Collection.GOALS])
def test_empty_collection_renders_empty_state(collection: Collection) -> None:
    markup = ViewRenderer(FORMATTER).render_collection(collection, [])

    assert f'data-empty-state="{collection.value}"' in markup
    assert "<table" not in markup


def test_transaction_list_is_newest_first_and_escaped() -> None:
    records = [
        _txn(1, "2024-03-01", 10.0, "Coffee"),
        _txn(2, "", 20.0, "<b>Books</b>"),
    ]

    markup = ViewRenderer(FORMATTER).render_collection(Collection.EXPENSES, records)

    assert "<table" in markup
    assert markup.index("&lt;b&gt;Books&lt;/b&gt;") < markup.index("Coffee")
    assert "<b>Books</b>" not in markup
    assert "01/03/2024" in markup
    assert "/expenses/1/edit" in markup
    assert "/expenses/2/delete" in markup


def test_transaction_rows_format_amounts_and_categories() -> None:
    rows = transaction_rows([TransactionRecord(id=7, description="Rent", amount=1500.0, category="")], FORMATTER)

    assert rows[0].amount_text == "R$ 1.500,00"
    assert rows[0].category == "Other"
    assert rows[0].date_text == ""


@pytest.mark.parametrize(
    ("percent", "message"),
    [
        (100, "Goal reached!"),
        (80, "Almost there! Final stretch!"),
        (79, "Good pace! Keep it up."),
        (50, "Good pace! Keep it up."),
        (25, "Good start!"),
        (24, "You can do it!"),
        (0, "You can do it!"),
    ],
)
def test_motivational_tiers(percent: int, message: str) -> None:
    assert motivational_tier(percent).message == message


def test_goal_cards_are_newest_first_with_progress() -> None:
    goals = [
        GoalRecord(id=1, title="Laptop", target=200.0, current=50.0, deadline="2024-12-24"),
        GoalRecord(id=2, title="Trip", target=100.0, current=100.0),
    ]

    cards = goal_cards(goals, FORMATTER)

    assert [card.id for card in cards] == [2, 1]
    assert cards[0].percent == 100 and cards[0].tone == "done"
    assert cards[0].deadline_text == "-"
    assert cards[1].percent == 25 and cards[1].tone == "started"
    assert cards[1].deadline_text == "24/12/2024"


def test_goal_markup_includes_tier_and_detail_link() -> None:
    goals = [GoalRecord(id=3, title="Bike & helmet", target=1000.0, current=850.0)]

    markup = ViewRenderer(FORMATTER).render_collection(Collection.GOALS, goals)

    assert "Bike &amp; helmet" in markup
    assert "Almost there! Final stretch!" in markup
    assert "/goals/3" in markup
    assert "85%" in markup


def test_month_comparison_income_growth_is_positive() -> None:
    records = [_txn(1, "2024-02-10", 100.0), _txn(2, "2024-03-02", 150.0)]

    comparison = month_comparison(Collection.INCOME, records, FORMATTER, TODAY)

    assert comparison.current_total == pytest.approx(150.0)
    assert comparison.previous_total == pytest.approx(100.0)
    assert comparison.variation_text == "+50%"
    assert comparison.tone == "positive"


def test_month_comparison_expense_growth_is_negative() -> None:
    records = [_txn(1, "2024-02-10", 150.0), _txn(2, "2024-03-02", 100.0), _txn(3, "2024-03-03", 50.0)]

    comparison = month_comparison(Collection.EXPENSES, records, FORMATTER, TODAY)

    assert comparison.variation_text == "+0%"
    assert comparison.tone == "positive"

    records.append(_txn(4, "2024-03-04", 15.0))
    comparison = month_comparison(Collection.EXPENSES, records, FORMATTER, TODAY)
    assert comparison.variation_text == "+10%"
    assert comparison.tone == "negative"


def test_month_comparison_keeps_zero_baseline_cases_apart() -> None:
    empty = month_comparison(Collection.INCOME, [], FORMATTER, TODAY)
    grew = month_comparison(Collection.INCOME, [_txn(1, "2024-03-02", 80.0)], FORMATTER, TODAY)

    assert (empty.percent, empty.variation_text, empty.tone) == (None, "—", "neutral")
    assert (grew.percent, grew.variation_text, grew.tone) == (100, "+100%", "neutral")


def test_dashboard_summary_totals_badges_and_goals() -> None:
    income = [_txn(1, "2024-02-05", 200.0), _txn(2, "2024-03-05", 300.0)]
    expenses = [_txn(3, "2024-02-07", 100.0), _txn(4, "2024-03-07", 80.0)]
    goals = [
        GoalRecord(id=10, title="A", target=100.0, current=10.0),
        GoalRecord(id=11, title="B", target=100.0, current=60.0),
        GoalRecord(id=12, title="C", target=100.0, current=90.0),
        GoalRecord(id=13, title="D", target=100.0, current=200.0, deadline="2025-01-31"),
    ]

    summary = dashboard_summary(income, expenses, goals, FORMATTER, TODAY)

    assert summary.balance == pytest.approx(220.0)
    assert summary.balance_text == "R$ 220,00"
    assert summary.income_badge is not None
    assert summary.income_badge.text == "+50%"
    assert summary.income_badge.phrase == "Better than last month (+50%)"
    assert summary.expense_badge is not None
    assert summary.expense_badge.tone == "positive"
    assert summary.expense_badge.phrase == "Better than last month (-20%)"
    assert [card.id for card in summary.almost_done_goals] == [13, 12, 11]
    assert [card.id for card in summary.top_goals] == [10, 11, 12]
    assert summary.top_goals[0].deadline_text == "No deadline"


def test_dashboard_hides_badges_without_previous_month() -> None:
    summary = dashboard_summary(
        [_txn(1, "2024-03-05", 300.0)],
        [_txn(2, "2024-02-05", 50.0), _txn(3, "2024-03-05", 75.0)],
        [],
        FORMATTER,
        TODAY,
    )

    assert summary.income_badge is None
    assert summary.expense_badge is not None
    assert summary.expense_badge.tone == "negative"
    assert summary.expense_badge.phrase == "Higher than last month (+50%)"
    assert summary.as_dict()["income_badge"] is None
