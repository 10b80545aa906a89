from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from services.forecast_service import calculate_cash_flow_forecast
from services.projection_service import calculate_balance_projection
from services.recurrence_service import project_occurrences

router = APIRouter(prefix="/forecast", tags=["forecast"])


@router.get("/balance")
def get_balance_projection(
    target_date: Optional[date] = Query(None),
    as_of_date: Optional[date] = Query(None),
    account_id: Optional[int] = Query(None),
):
    """
    Projected balance at ``target_date`` (default: end of the current month).

    Query Parameters:
        target_date (optional): ISO date to project to.
        as_of_date (optional): reference "today"; defaults to the real today.
        account_id (optional): restrict to one account.

    Read-only.
    """
    projection = calculate_balance_projection(target_date, today=as_of_date, account_id=account_id)
    return projection.to_dict()


@router.get("/cash-flow")
def get_cash_flow_forecast(
    months: int = Query(6, ge=1, le=24),
    as_of_date: Optional[date] = Query(None),
):
    """Month-by-month cash-flow forecast from historical averages."""
    return calculate_cash_flow_forecast(today=as_of_date, months=months).to_dict()


@router.get("/occurrences")
def preview_occurrences(
    anchor: date = Query(...),
    frequency: str = Query(...),
    start: date = Query(...),
    end: date = Query(...),
):
    """Preview the dates a recurrence would land on within [start, end]."""
    dates = project_occurrences(anchor, frequency, start, end)
    return {"count": len(dates), "dates": [d.isoformat() for d in dates]}
