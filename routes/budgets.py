from fastapi import APIRouter

from models.schemas import BudgetCreate, BudgetUpdate
from services import budget_service

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.get("")
def list_budgets():
    budgets = budget_service.list_budgets()
    return {"count": len(budgets), "budgets": budgets}


@router.get("/overview")
def overview():
    return budget_service.budget_overview()


@router.get("/{budget_id}")
def get_budget(budget_id: int):
    return budget_service.get_budget(budget_id)


@router.post("", status_code=201)
def create_budget(payload: BudgetCreate):
    return budget_service.create_budget(**payload.model_dump())


@router.put("/{budget_id}")
def update_budget(budget_id: int, payload: BudgetUpdate):
    return budget_service.update_budget(budget_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{budget_id}")
def delete_budget(budget_id: int):
    budget_service.delete_budget(budget_id)
    return {"success": True}
