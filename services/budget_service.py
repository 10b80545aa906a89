import logging
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from db import get_db
from repositories.budgets_repository import (
    insert_budget,
    get_budget_by_id,
    get_all_budgets,
    update_budget as repo_update_budget,
    delete_budget as repo_delete_budget,
    insert_period,
    get_current_periods,
    close_period,
    update_current_period_amount,
)
from repositories.categories_repository import get_category_by_id
from repositories.transactions_repository import category_spent
from services.activity_service import log_activity
from services.errors import NotFoundError
from services.recurrence_service import first_index_on_or_after
from utils.money import to_money

PERIOD_LENGTHS = {
    "weekly": relativedelta(days=7),
    "monthly": relativedelta(months=1),
    "yearly": relativedelta(years=1),
}


def period_range(period, budget_start, index=0):
    """Half-open [start, end) range of the index-th period after ``budget_start``.

    Every boundary is ``budget_start + k * length`` so a month-end start keeps
    its day (Jan 31 -> Feb 28 -> Mar 31).
    """
    step = PERIOD_LENGTHS[period]
    return budget_start + step * index, budget_start + step * (index + 1)


def period_index(period, budget_start, day):
    """Index of the period that contains ``day``."""
    end_index = first_index_on_or_after(budget_start, PERIOD_LENGTHS[period], day + timedelta(days=1))
    return max(end_index - 1, 0)


def budget_status(spent, budgeted, alert_threshold):
    percentage = (spent / budgeted) * 100 if budgeted else 0.0
    if percentage >= 100:
        return "over"
    if percentage >= alert_threshold:
        return "alert"
    return "on_track"


def list_budgets():
    conn = get_db()
    try:
        return get_all_budgets(conn)
    finally:
        conn.close()


def get_budget(budget_id):
    conn = get_db()
    try:
        budget = get_budget_by_id(conn, budget_id)
    finally:
        conn.close()
    if not budget:
        raise NotFoundError("Budget", budget_id)
    return budget


def create_budget(*, name, amount, period, category_id, alert_threshold=80, start_date=None):
    """Create a budget and its first current period."""
    start_date = start_date or date.today()
    conn = get_db()
    try:
        if not get_category_by_id(conn, category_id):
            raise NotFoundError("Category", category_id)

        conn.begin()
        budget_id = insert_budget(conn, name, category_id, amount, period, alert_threshold, start_date)
        start, end = period_range(period, start_date)
        insert_period(conn, budget_id, start, end, amount)
        log_activity(conn, "CREATE", "BUDGET", f"Budget created: {name} ({period})",
                     amount=amount, entity_id=budget_id)
        conn.commit()
        return get_budget_by_id(conn, budget_id)
    finally:
        conn.close()


def update_budget(budget_id, **changes):
    conn = get_db()
    try:
        if not get_budget_by_id(conn, budget_id):
            raise NotFoundError("Budget", budget_id)

        fields = {k: v for k, v in changes.items() if v is not None}
        if "category_id" in fields and not get_category_by_id(conn, fields["category_id"]):
            raise NotFoundError("Category", fields["category_id"])

        repo_update_budget(conn, budget_id, fields)
        if "amount" in fields:
            update_current_period_amount(conn, budget_id, fields["amount"])
        log_activity(conn, "UPDATE", "BUDGET", f"Budget {budget_id} updated",
                     amount=fields.get("amount"), entity_id=budget_id, metadata=fields)
        return get_budget_by_id(conn, budget_id)
    finally:
        conn.close()


def delete_budget(budget_id):
    conn = get_db()
    try:
        budget = get_budget_by_id(conn, budget_id)
        if not budget:
            raise NotFoundError("Budget", budget_id)
        repo_delete_budget(conn, budget_id)
        log_activity(conn, "DELETE", "BUDGET", f"Budget deleted: {budget['name']}",
                     entity_id=budget_id)
    finally:
        conn.close()


def roll_over_periods(today=None):
    """Close expired current periods and open the period containing today.

    Returns the number of periods opened.
    """
    today = today or date.today()
    opened = 0
    conn = get_db()
    try:
        for period in get_current_periods(conn):
            if today < period["period_end"]:
                continue

            index = period_index(period["period"], period["budget_start"], today)
            start, end = period_range(period["period"], period["budget_start"], index)

            close_period(conn, period["id"])
            insert_period(conn, period["budget_id"], start, end, period["amount"])
            opened += 1
            logging.info(f"Budget {period['budget_id']} rolled over to {start} - {end - timedelta(days=1)}")
    finally:
        conn.close()
    return opened


def budget_overview(today=None):
    """Current periods with spend, percentage and status, plus totals."""
    roll_over_periods(today)

    conn = get_db()
    try:
        periods = get_current_periods(conn)
        items = []
        for p in periods:
            spent = float(category_spent(conn, p["category_id"], p["period_start"], p["period_end"]))
            budgeted = float(p["budgeted_amount"])
            percentage = (spent / budgeted) * 100 if budgeted else 0.0
            items.append({
                "period_id": p["id"],
                "budget_id": p["budget_id"],
                "name": p["name"],
                "category": p["category_name"] or p["name"],
                "icon": p["category_icon"],
                "period": p["period"],
                "period_start": p["period_start"],
                "period_end": p["period_end"],
                "budgeted": to_money(budgeted),
                "spent": to_money(spent),
                "remaining": to_money(budgeted - spent),
                "percentage": round(min(percentage, 100.0), 1),
                "alert_threshold": p["alert_threshold"],
                "status": budget_status(spent, budgeted, p["alert_threshold"]),
            })
    finally:
        conn.close()

    items.sort(key=lambda item: item["spent"], reverse=True)
    return {
        "total_budgeted": to_money(sum(i["budgeted"] for i in items)),
        "total_spent": to_money(sum(i["spent"] for i in items)),
        "over_budget_count": sum(1 for i in items if i["status"] == "over"),
        "alert_count": sum(1 for i in items if i["status"] == "alert"),
        "budgets": items,
    }
