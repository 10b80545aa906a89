"""
Tests for the balance projection, cash-flow forecast and calendar services.
"""

from datetime import date

import pytest

from services import account_service, recurring_service, transaction_service
from services.calendar_service import build_month_calendar, day_activity
from services.forecast_service import calculate_cash_flow_forecast, calculate_monthly_averages
from services.projection_service import calculate_balance_projection

TODAY = date(2025, 3, 10)


def _tx(amount, type, day, **kwargs):
    return transaction_service.add_transaction(
        amount=amount, description=f"{type} {day}", type=type, transaction_date=day, **kwargs
    )


def _recurring(name, amount, type, frequency, start_date, **kwargs):
    return recurring_service.create_recurring(
        name=name, amount=amount, type=type, frequency=frequency, start_date=start_date, **kwargs
    )


# ── Balance projection ───────────────────────────────────────────────────────

def test_projection_adds_future_transactions_and_recurring():
    _tx(1000, "income", date(2025, 3, 1))
    _tx(100, "expense", date(2025, 3, 15))
    _recurring("Rent", 500, "expense", "monthly", date(2025, 3, 20))

    result = calculate_balance_projection(date(2025, 3, 31), today=TODAY)

    assert result.starting_balance == 1000
    assert result.future_transactions_total == -100
    assert result.recurring_total == -500
    assert result.projected_balance == 400
    assert [(o.name, o.date, o.amount) for o in result.occurrences] == [("Rent", date(2025, 3, 20), -500)]


def test_projection_timeline_is_daily_and_ends_on_projection():
    _tx(1000, "income", date(2025, 3, 1))
    _tx(100, "expense", date(2025, 3, 15))
    _recurring("Rent", 500, "expense", "monthly", date(2025, 3, 20))

    result = calculate_balance_projection(date(2025, 3, 31), today=TODAY)
    balances = {day.date: day.projected_balance for day in result.timeline}

    assert len(result.timeline) == 22
    assert balances[TODAY] == 1000
    assert balances[date(2025, 3, 14)] == 1000
    assert balances[date(2025, 3, 15)] == 900
    assert balances[date(2025, 3, 20)] == 400
    assert result.timeline[-1].projected_balance == result.projected_balance


def test_deactivated_account_is_left_out_of_all_accounts_projection():
    old = account_service.create_account(name="Old", type="cash")
    _tx(500, "income", date(2025, 3, 20), account_id=old["id"])
    _recurring("Allowance", 50, "income", "weekly", date(2025, 3, 11), account_id=old["id"])
    account_service.update_account(old["id"], is_active=False)

    result = calculate_balance_projection(date(2025, 3, 31), today=TODAY)

    assert result.starting_balance == 0
    assert result.future_transactions_total == 0
    assert result.recurring_total == 0
    assert result.occurrences == []
    assert result.projected_balance == 0
    assert result.timeline[-1].projected_balance == 0


def test_recurring_due_today_is_not_projected():
    _recurring("Gym", 10, "expense", "weekly", TODAY)
    result = calculate_balance_projection(date(2025, 3, 31), today=TODAY)
    assert [o.date for o in result.occurrences] == [date(2025, 3, 17), date(2025, 3, 24), date(2025, 3, 31)]
    assert result.recurring_total == -30


def test_income_recurrence_is_positive():
    _recurring("Salary", 2000, "income", "biweekly", date(2025, 3, 14))
    result = calculate_balance_projection(date(2025, 3, 31), today=TODAY)
    assert result.recurring_total == 4000


def test_paused_and_ended_recurrences_are_ignored():
    paused = _recurring("Paused", 50, "expense", "weekly", date(2025, 3, 11))
    recurring_service.set_active(paused["id"], False)
    _recurring("Ended", 50, "expense", "weekly", date(2025, 3, 11), end_date=date(2025, 3, 12))

    result = calculate_balance_projection(date(2025, 3, 31), today=TODAY)
    assert result.recurring_total == -50


def test_projection_defaults_to_end_of_month():
    result = calculate_balance_projection(today=date(2024, 2, 10))
    assert result.end_date == date(2024, 2, 29)


def test_projection_rejects_past_target():
    with pytest.raises(ValueError):
        calculate_balance_projection(date(2025, 3, 1), today=TODAY)


def test_projection_for_single_account():
    savings = account_service.create_account(name="Rainy day", type="savings", opening_balance=300)
    _tx(1000, "income", date(2025, 3, 1))
    _recurring("Top-up", 20, "income", "weekly", date(2025, 3, 11), account_id=savings["id"])

    result = calculate_balance_projection(date(2025, 3, 31), today=TODAY, account_id=savings["id"])
    assert result.starting_balance == 300
    assert result.recurring_total == 60
    assert result.projected_balance == 360


def test_projection_to_dict_uses_iso_dates():
    payload = calculate_balance_projection(date(2025, 3, 12), today=TODAY).to_dict()
    assert payload["start_date"] == "2025-03-10"
    assert payload["timeline"][-1]["date"] == "2025-03-12"


# ── Cash-flow forecast ───────────────────────────────────────────────────────

def test_monthly_averages_over_active_months():
    averages = calculate_monthly_averages([
        {"income": 3000, "expenses": 2000},
        {"income": 1000, "expenses": 1000},
    ])
    assert averages == {"income": 2000.0, "expenses": 1500.0, "balance": 500.0}


def test_monthly_averages_without_history():
    assert calculate_monthly_averages([]) == {"income": 0.0, "expenses": 0.0, "balance": 0.0}


def test_cash_flow_forecast_rolls_averages_forward():
    _tx(3000, "income", date(2025, 1, 5))
    _tx(2000, "expense", date(2025, 1, 20))
    _tx(1000, "income", date(2025, 2, 5))
    _tx(1000, "expense", date(2025, 2, 20))

    forecast = calculate_cash_flow_forecast(today=TODAY, months=3, history_months=6)

    assert forecast.current_balance == 1000
    assert forecast.months_of_history == 2
    assert forecast.average_income == 2000
    assert forecast.average_expenses == 1500
    assert [m.month for m in forecast.months] == ["Mar 2025", "Apr 2025", "May 2025"]
    assert [m.projected_balance for m in forecast.months] == [1500, 2000, 2500]


def test_cash_flow_forecast_with_no_history_is_flat():
    forecast = calculate_cash_flow_forecast(today=TODAY, months=2)
    assert [m.projected_balance for m in forecast.months] == [0, 0]
    assert forecast.to_dict()["months"][0]["month"] == "Mar 2025"


# ── Calendar ─────────────────────────────────────────────────────────────────

def test_calendar_grid_with_transactions_and_projections():
    _tx(60, "expense", date(2025, 3, 3))
    _tx(15, "expense", date(2025, 2, 24))
    _recurring("Gym", 10, "expense", "weekly", date(2025, 2, 3))

    calendar = build_month_calendar(2025, 3, today=TODAY)
    days = {d.date: d for d in calendar.days}

    assert calendar.days[0].date == date(2025, 2, 23)
    assert calendar.days[-1].date == date(2025, 4, 5)
    assert len(calendar.days) % 7 == 0

    assert days[TODAY].is_today
    assert not days[date(2025, 2, 24)].is_current_month
    assert [t["amount"] for t in days[date(2025, 2, 24)].transactions] == [-15]
    assert [t["amount"] for t in days[date(2025, 3, 3)].transactions] == [-60]

    gym_days = [d.date for d in calendar.days if d.recurring]
    assert gym_days == [date(2025, 3, 3), date(2025, 3, 10), date(2025, 3, 17),
                        date(2025, 3, 24), date(2025, 3, 31)]


def test_calendar_padding_days_carry_no_projections():
    _recurring("Gym", 10, "expense", "weekly", date(2025, 2, 3))
    calendar = build_month_calendar(2025, 3, today=TODAY)
    assert all(not d.recurring for d in calendar.days if not d.is_current_month)


def test_day_activity():
    _tx(60, "expense", date(2025, 3, 3))
    _recurring("Phone", 40, "expense", "monthly", date(2025, 1, 3))

    entry = day_activity(date(2025, 3, 3), today=TODAY)
    assert [t["amount"] for t in entry.transactions] == [-60]
    assert [r["name"] for r in entry.recurring] == ["Phone"]
    assert entry.to_dict()["date"] == "2025-03-03"
