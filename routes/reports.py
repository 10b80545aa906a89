from typing import Optional

from fastapi import APIRouter, Query

from models.schemas import ProfileUpdate
from services import activity_service, report_service

router = APIRouter()


@router.get("/reports/income-expenses")
def income_vs_expenses(months: int = Query(6, ge=1, le=24)):
    return {"months": report_service.income_vs_expenses(months=months)}


@router.get("/reports/categories")
def spending_by_category(
    year: Optional[int] = Query(None, ge=2000, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
):
    return report_service.category_breakdown(year=year, month=month)


# -------------------------
# ACTIVITY LOG
# -------------------------

@router.get("/logs")
def list_logs(page: int = Query(1, ge=1)):
    return activity_service.list_activity(page=page)


# -------------------------
# PROFILE / SETTINGS
# -------------------------

@router.get("/profile")
def get_profile():
    return activity_service.get_profile()


@router.put("/profile")
def update_profile(payload: ProfileUpdate):
    return activity_service.update_profile(**payload.model_dump())
