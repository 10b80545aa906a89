from fastapi import APIRouter, Query

from models.schemas import GoalCreate, GoalContribution, SavingsTransfer
from services import goal_service, transfer_service

router = APIRouter()


@router.get("/goals")
def list_goals():
    goals = goal_service.list_goals()
    return {"count": len(goals), "goals": goals}


@router.get("/goals/{goal_id}")
def get_goal(goal_id: int):
    return goal_service.get_goal(goal_id)


@router.post("/goals", status_code=201)
def create_goal(payload: GoalCreate):
    return goal_service.create_goal(**payload.model_dump())


@router.post("/goals/{goal_id}/contributions", status_code=201)
def add_contribution(goal_id: int, payload: GoalContribution):
    return goal_service.add_contribution(goal_id, **payload.model_dump())


@router.delete("/goals/{goal_id}")
def archive_goal(goal_id: int):
    goal_service.archive_goal(goal_id)
    return {"success": True}


# -------------------------
# SAVINGS TRANSFERS
# -------------------------

@router.get("/savings/transfers")
def list_transfers(limit: int = Query(50, ge=1, le=500)):
    transfers = transfer_service.list_transfers(limit=limit)
    return {"count": len(transfers), "transfers": transfers}


@router.post("/savings/transfers", status_code=201)
def create_transfer(payload: SavingsTransfer):
    return transfer_service.transfer_savings(**payload.model_dump())
