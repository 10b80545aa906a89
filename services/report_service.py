from datetime import date

from db import get_db
from repositories.transactions_repository import monthly_income_expenses, spending_by_category
from utils.dates import add_months, month_bounds
from utils.money import to_money


def income_vs_expenses(today=None, months=6):
    """Per-month income/expenses/net for the last ``months`` months (current included)."""
    today = today or date.today()
    first_month = month_bounds(add_months(today, -(months - 1)))[0]
    end = month_bounds(today)[1]

    conn = get_db()
    try:
        rows = {r["month"]: r for r in monthly_income_expenses(conn, first_month, end)}
    finally:
        conn.close()

    report = []
    for i in range(months):
        month_start = add_months(first_month, i)
        key = month_start.strftime("%Y-%m")
        row = rows.get(key, {"income": 0.0, "expenses": 0.0})
        income = float(row["income"])
        expenses = float(row["expenses"])
        report.append({
            "month": key,
            "label": month_start.strftime("%b %Y"),
            "income": to_money(income),
            "expenses": to_money(expenses),
            "net": to_money(income - expenses),
        })
    return report


def category_breakdown(year=None, month=None, today=None):
    today = today or date.today()
    day = date(year or today.year, month or today.month, 1)
    start, end = month_bounds(day)

    conn = get_db()
    try:
        rows = spending_by_category(conn, start, end)
    finally:
        conn.close()

    total = sum(float(r["total"]) for r in rows)
    return {
        "month": start.strftime("%Y-%m"),
        "total": to_money(total),
        "categories": [
            {
                "category": r["category"],
                "total": to_money(r["total"]),
                "share": round(float(r["total"]) / total * 100, 1) if total else 0.0,
            }
            for r in rows
        ],
    }
