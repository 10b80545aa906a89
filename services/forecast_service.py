### Forecast service averages recent monthly income/expenses and rolls them forward into a cash-flow forecast.
from datetime import date

import config
from db import get_db
from repositories.accounts_repository import get_total_balance
from repositories.transactions_repository import monthly_income_expenses
from models.forecast_dto import CashFlowForecastDTO, ForecastMonthDTO
from utils.dates import add_months
from utils.money import to_money


def calculate_monthly_averages(monthly_rows):
    """Average income/expenses over the months that actually have activity."""
    if not monthly_rows:
        return {"income": 0.0, "expenses": 0.0, "balance": 0.0}

    months = len(monthly_rows)
    avg_income = sum(float(r["income"]) for r in monthly_rows) / months
    avg_expenses = sum(float(r["expenses"]) for r in monthly_rows) / months
    return {
        "income": avg_income,
        "expenses": avg_expenses,
        "balance": avg_income - avg_expenses,
    }


def calculate_cash_flow_forecast(today=None, months=None, history_months=None) -> CashFlowForecastDTO:
    today = today or date.today()
    months = config.FORECAST_MONTHS if months is None else months
    history_months = config.HISTORY_MONTHS if history_months is None else history_months

    conn = get_db()
    try:
        current_balance = float(get_total_balance(conn, today))
        history = monthly_income_expenses(conn, add_months(today, -history_months), today)
    finally:
        conn.close()

    averages = calculate_monthly_averages(history)

    forecast = []
    running = current_balance
    for i in range(months):
        month_label = add_months(today, i).strftime("%b %Y")
        running += averages["income"] - averages["expenses"]
        forecast.append(ForecastMonthDTO(
            month=month_label,
            projected_income=to_money(averages["income"]),
            projected_expenses=to_money(averages["expenses"]),
            projected_balance=to_money(running),
        ))

    return CashFlowForecastDTO(
        current_balance=to_money(current_balance),
        average_income=to_money(averages["income"]),
        average_expenses=to_money(averages["expenses"]),
        months_of_history=len(history),
        months=forecast,
    )
