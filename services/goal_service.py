from datetime import date
from math import ceil

from db import get_db
from repositories.goals_repository import (
    insert_goal,
    get_goal_by_id,
    get_all_goals,
    add_to_current_amount,
    set_goal_active,
    insert_goal_transaction,
    get_goal_transactions,
)
from services.activity_service import log_activity
from services.errors import NotFoundError
from utils.money import to_money


def calculate_progress(current, target):
    if not target:
        return 0.0
    return round(min((current / target) * 100, 100.0), 1)


def days_to_target(target_date, today):
    if target_date is None:
        return None
    return (target_date - today).days


def months_to_goal(current, target, monthly_contribution):
    if not monthly_contribution or monthly_contribution <= 0:
        return None
    remaining = target - current
    if remaining <= 0:
        return 0
    return ceil(remaining / monthly_contribution)


def _with_progress(goal, today):
    goal["progress"] = calculate_progress(goal["current_amount"], goal["target_amount"])
    goal["days_to_target"] = days_to_target(goal["target_date"], today)
    goal["months_to_goal"] = months_to_goal(
        goal["current_amount"], goal["target_amount"], goal["monthly_contribution"]
    )
    goal["remaining"] = to_money(max(goal["target_amount"] - goal["current_amount"], 0))
    return goal


def list_goals(today=None):
    today = today or date.today()
    conn = get_db()
    try:
        return [_with_progress(g, today) for g in get_all_goals(conn)]
    finally:
        conn.close()


def get_goal(goal_id, today=None):
    today = today or date.today()
    conn = get_db()
    try:
        goal = get_goal_by_id(conn, goal_id)
        if not goal:
            raise NotFoundError("Savings goal", goal_id)
        goal = _with_progress(goal, today)
        goal["transactions"] = get_goal_transactions(conn, goal_id)
        return goal
    finally:
        conn.close()


def create_goal(*, name, target_amount, current_amount=0.0, target_date=None,
                monthly_contribution=None, description=None):
    conn = get_db()
    try:
        goal_id = insert_goal(
            conn, name, target_amount,
            target_date=target_date,
            monthly_contribution=monthly_contribution,
            description=description,
            current_amount=current_amount,
        )
        log_activity(conn, "CREATE", "SAVINGS_GOAL", f"Savings goal created: {name}",
                     amount=target_amount, entity_id=goal_id)
    finally:
        conn.close()
    return get_goal(goal_id)


def add_contribution(goal_id, *, amount, transaction_type="contribution", description=None):
    """Record a contribution (positive) or withdrawal (stored negative)."""
    delta = abs(amount) if transaction_type == "contribution" else -abs(amount)

    conn = get_db()
    try:
        goal = get_goal_by_id(conn, goal_id)
        if not goal:
            raise NotFoundError("Savings goal", goal_id)
        if delta < 0 and goal["current_amount"] + delta < 0:
            raise ValueError("Withdrawal exceeds the goal's saved amount")

        conn.begin()
        insert_goal_transaction(conn, goal_id, delta, transaction_type, description)
        add_to_current_amount(conn, goal_id, delta)
        log_activity(conn, transaction_type.upper(), "SAVINGS_GOAL",
                     f"{transaction_type.title()} for {goal['name']}",
                     amount=delta, entity_id=goal_id)
        conn.commit()
    finally:
        conn.close()
    return get_goal(goal_id)


def archive_goal(goal_id):
    conn = get_db()
    try:
        if not get_goal_by_id(conn, goal_id):
            raise NotFoundError("Savings goal", goal_id)
        set_goal_active(conn, goal_id, False)
        log_activity(conn, "ARCHIVE", "SAVINGS_GOAL", f"Savings goal {goal_id} archived",
                     entity_id=goal_id)
    finally:
        conn.close()
