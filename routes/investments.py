from fastapi import APIRouter

from models.schemas import InvestmentCreate, InvestmentUpdate
from services import investment_service

router = APIRouter(prefix="/investments", tags=["investments"])


@router.get("")
def get_portfolio():
    return investment_service.portfolio()


@router.get("/{investment_id}")
def get_investment(investment_id: int):
    return investment_service.get_investment(investment_id)


@router.post("", status_code=201)
def add_investment(payload: InvestmentCreate):
    return investment_service.add_investment(**payload.model_dump())


@router.put("/{investment_id}")
def update_investment(investment_id: int, payload: InvestmentUpdate):
    return investment_service.update_investment(
        investment_id, **payload.model_dump(exclude_unset=True)
    )


@router.delete("/{investment_id}")
def delete_investment(investment_id: int):
    investment_service.delete_investment(investment_id)
    return {"success": True}
