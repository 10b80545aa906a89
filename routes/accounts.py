from fastapi import APIRouter, Query

from models.schemas import AccountCreate, AccountUpdate, CategoryCreate
from services import account_service

router = APIRouter()


@router.get("/accounts")
def list_accounts(include_inactive: bool = Query(False)):
    accounts = account_service.list_accounts(include_inactive=include_inactive)
    return {
        "count": len(accounts),
        "total_balance": account_service.total_balance(),
        "accounts": accounts,
    }


@router.get("/accounts/{account_id}")
def get_account(account_id: int):
    return account_service.get_account(account_id)


@router.post("/accounts", status_code=201)
def create_account(payload: AccountCreate):
    return account_service.create_account(**payload.model_dump())


@router.put("/accounts/{account_id}")
def update_account(account_id: int, payload: AccountUpdate):
    return account_service.update_account(account_id, **payload.model_dump(exclude_unset=True))


@router.delete("/accounts/{account_id}")
def deactivate_account(account_id: int):
    account_service.update_account(account_id, is_active=False)
    return {"success": True}


# -------------------------
# CATEGORIES
# -------------------------

@router.get("/categories")
def list_categories():
    categories = account_service.list_categories()
    return {"count": len(categories), "categories": categories}


@router.post("/categories", status_code=201)
def create_category(payload: CategoryCreate):
    return account_service.create_category(**payload.model_dump())


@router.delete("/categories/{category_id}")
def delete_category(category_id: int):
    account_service.delete_category(category_id)
    return {"success": True}
