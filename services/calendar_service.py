from collections import defaultdict
from datetime import date

from db import get_db
from repositories.recurring_repository import get_all_recurring
from repositories.transactions_repository import get_all_transactions
from services.recurrence_service import occurrences_for
from models.calendar_dto import CalendarDay, MonthCalendar
from utils.dates import calendar_grid_bounds, iter_days, month_bounds


def build_month_calendar(year, month, today=None) -> MonthCalendar:
    """Sunday-to-Saturday grid covering the month.

    Recurring transactions are projected onto the month itself only; the
    leading/trailing days from neighbouring months carry their posted
    transactions but no projections.
    """
    today = today or date.today()
    anchor_day = date(year, month, 1)
    month_start, month_end = month_bounds(anchor_day)
    grid_start, grid_end = calendar_grid_bounds(anchor_day)

    conn = get_db()
    try:
        transactions = get_all_transactions(conn, start_date=grid_start, end_date=grid_end,
                                            ascending=True)
        templates = get_all_recurring(conn, active_only=True)
    finally:
        conn.close()

    tx_by_day = defaultdict(list)
    for tx in transactions:
        tx_by_day[tx["transaction_date"]].append(tx)

    recurring_by_day = defaultdict(list)
    for template in templates:
        for occ in occurrences_for(template, month_start, month_end):
            recurring_by_day[occ].append({
                "id": template["id"],
                "name": template["name"],
                "amount": template["amount"],
                "type": template["type"],
                "frequency": template["frequency"],
                "category_name": template["category_name"],
                "category_icon": template["category_icon"],
            })

    days = [
        CalendarDay(
            date=day,
            is_current_month=(day.month == month and day.year == year),
            is_today=(day == today),
            transactions=tx_by_day.get(day, []),
            recurring=recurring_by_day.get(day, []),
        )
        for day in iter_days(grid_start, grid_end)
    ]
    return MonthCalendar(year=year, month=month, days=days)


def day_activity(day, today=None):
    """Transactions and recurring projections for a single day (day drawer)."""
    calendar = build_month_calendar(day.year, day.month, today=today)
    for entry in calendar.days:
        if entry.date == day:
            return entry
    return CalendarDay(date=day, is_current_month=True, is_today=(day == (today or date.today())))
