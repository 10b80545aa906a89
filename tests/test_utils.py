"""Tests for utils/money.py and utils/dates.py."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from utils.dates import add_months, calendar_grid_bounds, iter_days, month_bounds, parse_date
from utils.money import parse_money, signed_amount, to_money


# ── Money ────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    ("12.5", Decimal("12.50")),
    ("$1,234.567", Decimal("1234.57")),
    ("(45.00)", Decimal("-45.00")),
    (" 3 ", Decimal("3.00")),
])
def test_parse_money(raw, expected):
    assert parse_money(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "abc"])
def test_parse_money_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_money(raw)


def test_to_money_rounds_half_up():
    assert to_money(2.675) == 2.68
    assert to_money(Decimal("10.005")) == 10.01
    assert to_money(None) == 0.0


def test_signed_amount():
    assert signed_amount(25, "expense") == -25.0
    assert signed_amount(-25, "expense") == -25.0
    assert signed_amount(-25, "income") == 25.0


# ── Dates ────────────────────────────────────────────────────────────────────

def test_parse_date_variants():
    assert parse_date(date(2025, 3, 1)) == date(2025, 3, 1)
    assert parse_date(datetime(2025, 3, 1, 14, 30)) == date(2025, 3, 1)
    assert parse_date("2025-03-01T10:00:00Z") == date(2025, 3, 1)


def test_month_bounds_leap_february():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_add_months_clips():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2025, 3, 31), -1) == date(2025, 2, 28)


def test_calendar_grid_runs_sunday_to_saturday():
    # March 2025 starts on a Saturday and ends on a Monday
    start, end = calendar_grid_bounds(date(2025, 3, 12))
    assert start == date(2025, 2, 23)
    assert end == date(2025, 4, 5)
    assert start.weekday() == 6
    assert end.weekday() == 5


def test_calendar_grid_month_already_aligned():
    # February 2026 starts on a Sunday and ends on a Saturday
    assert calendar_grid_bounds(date(2026, 2, 1)) == (date(2026, 2, 1), date(2026, 2, 28))


def test_iter_days_inclusive():
    days = list(iter_days(date(2025, 1, 30), date(2025, 2, 2)))
    assert days == [date(2025, 1, 30), date(2025, 1, 31), date(2025, 2, 1), date(2025, 2, 2)]
