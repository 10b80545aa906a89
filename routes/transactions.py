from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Query

from models.schemas import TransactionCreate, TransactionUpdate
from services import transaction_service

router = APIRouter()


# -------------------------
# READ TRANSACTIONS
# -------------------------

@router.get("/transactions")
def list_transactions(
    account_id: Optional[int] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    type: Optional[Literal["income", "expense"]] = Query(None),
    category_id: Optional[int] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=1000),
):
    transactions = transaction_service.get_all_transactions(
        account_id=account_id,
        start_date=start_date,
        end_date=end_date,
        type=type,
        category_id=category_id,
        limit=limit,
    )
    return {
        "summary": transaction_service.summarize(transactions),
        "transactions": transactions,
    }


@router.get("/transactions/{transaction_id}")
def get_transaction(transaction_id: int):
    return transaction_service.get_transaction(transaction_id)


# -------------------------
# WRITE TRANSACTIONS
# -------------------------

@router.post("/transactions", status_code=201)
def create_transaction(payload: TransactionCreate):
    return transaction_service.add_transaction(**payload.model_dump())


@router.put("/transactions/{transaction_id}")
def update_transaction(transaction_id: int, payload: TransactionUpdate):
    return transaction_service.update_transaction(
        transaction_id, **payload.model_dump(exclude_unset=True)
    )


@router.delete("/transactions/{transaction_id}")
def delete_transaction(transaction_id: int):
    transaction_service.delete_transaction(transaction_id)
    return {"success": True}
