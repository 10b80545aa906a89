from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from models.schemas import RecurringCreate, RecurringUpdate
from services import recurring_service

router = APIRouter(prefix="/recurring", tags=["recurring"])


@router.get("")
def list_recurring(active_only: bool = Query(False)):
    rows = recurring_service.list_recurring(active_only=active_only)
    return {
        "active": [r for r in rows if r["is_active"]],
        "inactive": [r for r in rows if not r["is_active"]],
    }


@router.get("/upcoming")
def list_upcoming(days: int = Query(7, ge=0, le=366), as_of_date: Optional[date] = Query(None)):
    items = recurring_service.upcoming(today=as_of_date, days=days)
    return {"count": len(items), "items": items}


@router.get("/subscriptions")
def list_subscriptions():
    return recurring_service.subscriptions()


@router.post("/process")
def process_due(as_of_date: Optional[date] = Query(None)):
    """Materialize every due recurring occurrence up to today."""
    created = recurring_service.process_due(today=as_of_date)
    return {"success": True, "created": created}


@router.get("/{recurring_id}")
def get_recurring(recurring_id: int):
    return recurring_service.get_recurring(recurring_id)


@router.post("", status_code=201)
def create_recurring(payload: RecurringCreate):
    return recurring_service.create_recurring(**payload.model_dump())


@router.put("/{recurring_id}")
def update_recurring(recurring_id: int, payload: RecurringUpdate):
    return recurring_service.update_recurring(
        recurring_id, **payload.model_dump(exclude_unset=True)
    )


@router.post("/{recurring_id}/pause")
def pause_recurring(recurring_id: int):
    return recurring_service.set_active(recurring_id, False)


@router.post("/{recurring_id}/resume")
def resume_recurring(recurring_id: int):
    return recurring_service.set_active(recurring_id, True)


@router.delete("/{recurring_id}")
def delete_recurring(recurring_id: int):
    recurring_service.delete_recurring(recurring_id)
    return {"success": True}
