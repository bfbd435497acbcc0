"""Mini README: Tests for the calendar month helpers.

Validates zero-based month identifiers, the January rollover and the
oldest-first trailing window used by the charts.
"""

from datetime import date

from fynov.finance import MonthId, current_month, month_label, previous_month, trailing_months


def test_current_month_is_zero_based():
    assert current_month(date(2024, 3, 15)) == MonthId(2024, 2)


def test_previous_month_rolls_back_across_years():
    assert previous_month(date(2024, 1, 10)) == MonthId(2023, 11)
    assert previous_month(date(2024, 7, 31)) == MonthId(2024, 5)


def test_trailing_months_oldest_first_ending_now():
    months = trailing_months(3, date(2024, 2, 29))

    assert months == [
        (MonthId(2023, 11), "Dec 2023"),
        (MonthId(2024, 0), "Jan 2024"),
        (MonthId(2024, 1), "Feb 2024"),
    ]


def test_trailing_months_has_exact_length():
    assert len(trailing_months(6, date(2024, 5, 1))) == 6
    assert len(trailing_months(14, date(2024, 5, 1))) == 14
    assert trailing_months(0, date(2024, 5, 1)) == []


def test_default_clock_is_today():
    today = date.today()
    assert current_month() == MonthId(today.year, today.month - 1)


def test_month_label_and_contains():
    month = MonthId(2024, 8)
    assert month_label(month) == "Sep 2024"
    assert month.contains(date(2024, 9, 30))
    assert not month.contains(date(2024, 8, 30))
