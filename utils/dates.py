from calendar import monthrange
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta


def parse_date(raw_date) -> date:
    """Accept a date, a datetime or an ISO string (time part ignored)."""
    if isinstance(raw_date, datetime):
        return raw_date.date()
    if isinstance(raw_date, date):
        return raw_date
    return date.fromisoformat(str(raw_date).strip()[:10])


def month_bounds(day: date):
    first = day.replace(day=1)
    last = day.replace(day=monthrange(day.year, day.month)[1])
    return first, last


def add_months(day: date, months: int) -> date:
    return day + relativedelta(months=months)


def calendar_grid_bounds(day: date):
    """Sunday on/before the first of the month through Saturday on/after the last."""
    first, last = month_bounds(day)
    # date.weekday(): Monday=0 .. Sunday=6
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    return start, end


def iter_days(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
