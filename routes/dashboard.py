from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

import config
from models.schemas import TransactionCreate
from services.account_service import list_accounts, total_balance
from services.activity_service import get_profile
from services.budget_service import budget_overview
from services.projection_service import calculate_balance_projection
from services.recurring_service import upcoming
from services.report_service import category_breakdown
from services.transaction_service import add_transaction, get_all_transactions, summarize
from utils.dates import month_bounds
from utils.money import parse_money

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/")
def root():
    return RedirectResponse(url="/dashboard")


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request):
    today = date.today()
    month_start, month_end = month_bounds(today)

    # --- Current balance ---
    current_balance = total_balance(today)
    accounts = list_accounts(today)

    # --- Monthly income / expenses ---
    monthly = summarize(get_all_transactions(start_date=month_start, end_date=today))

    # --- Spending by category ---
    categories = category_breakdown(today=today)["categories"]

    # --- Recent transactions ---
    recent_transactions = get_all_transactions(start_date=month_start, end_date=month_end, limit=5)

    # --- End-of-month projection ---
    projection = calculate_balance_projection(month_end, today=today)

    profile = get_profile() or {}

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "currency": profile.get("currency") or config.CURRENCY,
            "current_balance": current_balance,
            "accounts": accounts,
            "monthly_income": monthly["income"],
            "monthly_expenses": monthly["expenses"],
            "monthly_net": monthly["net"],
            "categories": categories,
            "category_labels": [c["category"] for c in categories],
            "category_totals": [c["total"] for c in categories],
            "recent_transactions": recent_transactions,
            "projected_balance": projection.projected_balance,
            "upcoming_items": upcoming(today),
            "budgets": budget_overview(today)["budgets"],
        }
    )


# -------------------------
# MANUAL TRANSACTION FORM SUBMISSION
# -------------------------
@router.post("/transactions/manual")
def add_manual_transaction_form(
    transaction_date: str = Form(...),
    description: str = Form(...),
    amount: str = Form(...),
    type: str = Form("expense"),
    account_id: Optional[int] = Form(None),
    category_id: Optional[int] = Form(None),
    notes: Optional[str] = Form(None),
):
    """
    Handles HTML form submission from the dashboard add-transaction card.
    """
    # same limits as the JSON route; a ValidationError is a ValueError and maps to 400
    payload = TransactionCreate(
        amount=abs(float(parse_money(amount))),
        description=description,
        type=type,
        transaction_date=transaction_date,
        account_id=account_id,
        category_id=category_id,
        notes=notes or None,
    )
    add_transaction(**payload.model_dump())

    # Redirect back to dashboard after submission
    return RedirectResponse(url="/dashboard", status_code=303)
