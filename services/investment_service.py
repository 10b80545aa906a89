from db import get_db
from repositories.investments_repository import (
    insert_investment,
    get_investment_by_id,
    get_all_investments,
    update_investment as repo_update_investment,
    delete_investment as repo_delete_investment,
)
from services.activity_service import log_activity
from services.errors import NotFoundError
from utils.money import to_money


def calculate_performance(investment):
    """Value, gain/loss and percent change; falls back to purchase price when unpriced."""
    current_price = investment["current_price"] or investment["purchase_price"]
    total_value = investment["quantity"] * current_price
    total_cost = investment["quantity"] * investment["purchase_price"]
    gain_loss = total_value - total_cost
    percentage = (gain_loss / total_cost) * 100 if total_cost > 0 else 0.0
    return {
        "total_value": to_money(total_value),
        "total_cost": to_money(total_cost),
        "gain_loss": to_money(gain_loss),
        "percentage": round(percentage, 2),
    }


def portfolio():
    conn = get_db()
    try:
        investments = get_all_investments(conn)
    finally:
        conn.close()

    holdings = [{**inv, "performance": calculate_performance(inv)} for inv in investments]
    total_value = sum(h["performance"]["total_value"] for h in holdings)
    total_cost = sum(h["performance"]["total_cost"] for h in holdings)
    total_gain = total_value - total_cost
    return {
        "total_value": to_money(total_value),
        "total_cost": to_money(total_cost),
        "total_gain_loss": to_money(total_gain),
        "percentage": round((total_gain / total_cost) * 100, 2) if total_cost > 0 else 0.0,
        "holdings": holdings,
    }


def get_investment(investment_id):
    conn = get_db()
    try:
        investment = get_investment_by_id(conn, investment_id)
    finally:
        conn.close()
    if not investment:
        raise NotFoundError("Investment", investment_id)
    return {**investment, "performance": calculate_performance(investment)}


def add_investment(**fields):
    conn = get_db()
    try:
        investment_id = insert_investment(conn, **fields)
        log_activity(conn, "CREATE", "INVESTMENT", f"Investment added: {fields['name']}",
                     amount=fields.get("quantity", 1.0) * fields["purchase_price"],
                     entity_id=investment_id)
    finally:
        conn.close()
    return get_investment(investment_id)


def update_investment(investment_id, **changes):
    conn = get_db()
    try:
        if not get_investment_by_id(conn, investment_id):
            raise NotFoundError("Investment", investment_id)
        fields = {k: v for k, v in changes.items() if v is not None}
        repo_update_investment(conn, investment_id, fields)
        log_activity(conn, "UPDATE", "INVESTMENT", f"Investment {investment_id} updated",
                     entity_id=investment_id, metadata=fields)
    finally:
        conn.close()
    return get_investment(investment_id)


def delete_investment(investment_id):
    conn = get_db()
    try:
        investment = get_investment_by_id(conn, investment_id)
        if not investment:
            raise NotFoundError("Investment", investment_id)
        repo_delete_investment(conn, investment_id)
        log_activity(conn, "DELETE", "INVESTMENT", f"Investment deleted: {investment['name']}",
                     entity_id=investment_id)
    finally:
        conn.close()
