from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from services.calendar_service import build_month_calendar, day_activity

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("")
def get_month_calendar(
    year: Optional[int] = Query(None, ge=2000, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
):
    """Calendar grid (Sunday to Saturday) with transactions and recurring projections."""
    today = date.today()
    calendar = build_month_calendar(year or today.year, month or today.month, today=today)
    return calendar.to_dict()


@router.get("/day/{day}")
def get_day(day: date):
    return day_activity(day).to_dict()
