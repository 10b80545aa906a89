"""Recurring transactions: CRUD, due processing, upcoming and subscriptions."""
import logging
from datetime import date, timedelta

import config
from db import get_db
from repositories.accounts_repository import get_account, get_or_create_main_account
from repositories.categories_repository import get_category_by_id
from repositories.recurring_repository import (
    insert_recurring,
    get_recurring_by_id,
    get_all_recurring,
    update_recurring as repo_update_recurring,
    delete_recurring as repo_delete_recurring,
)
from repositories.transactions_repository import insert_transaction
from services.activity_service import log_activity
from services.errors import NotFoundError
from services.recurrence_service import (
    MAX_ITERATIONS,
    cadence_anchor,
    monthly_equivalent,
    next_occurrence,
    occurrences_for,
    project_occurrences,
)
from utils.money import signed_amount, to_money

CLEARABLE_FIELDS = {"end_date", "notes", "category_id"}


def list_recurring(active_only=False):
    conn = get_db()
    try:
        return get_all_recurring(conn, active_only=active_only)
    finally:
        conn.close()


def get_recurring(recurring_id):
    conn = get_db()
    try:
        row = get_recurring_by_id(conn, recurring_id)
    finally:
        conn.close()
    if not row:
        raise NotFoundError("Recurring transaction", recurring_id)
    return row


def create_recurring(*, name, amount, type, frequency, start_date, next_due_date=None,
                     end_date=None, account_id=None, category_id=None, notes=None):
    """Create a recurring transaction; the first due date defaults to the start date."""
    next_due_date = next_due_date or start_date
    if end_date is not None and end_date < start_date:
        raise ValueError("end_date must be on or after start_date")

    conn = get_db()
    try:
        if account_id is None:
            account_id = get_or_create_main_account(conn)
        elif not get_account(conn, account_id, date.today()):
            raise NotFoundError("Account", account_id)
        if category_id is not None and not get_category_by_id(conn, category_id):
            raise NotFoundError("Category", category_id)

        recurring_id = insert_recurring(
            conn,
            account_id=account_id,
            name=name,
            amount=abs(amount),
            type=type,
            frequency=frequency,
            start_date=start_date,
            next_due_date=next_due_date,
            end_date=end_date,
            category_id=category_id,
            notes=notes,
        )
        log_activity(conn, "CREATE", "RECURRING", f"Recurring {frequency} {type}: {name}",
                     amount=signed_amount(amount, type), entity_id=recurring_id)
        return get_recurring_by_id(conn, recurring_id)
    finally:
        conn.close()


def update_recurring(recurring_id, **changes):
    """Apply the given changes; None clears a field listed in CLEARABLE_FIELDS."""
    conn = get_db()
    try:
        current = get_recurring_by_id(conn, recurring_id)
        if not current:
            raise NotFoundError("Recurring transaction", recurring_id)

        fields = dict(changes)
        for key, value in fields.items():
            if value is None and key not in CLEARABLE_FIELDS:
                raise ValueError(f"{key} cannot be empty")
        if "amount" in fields:
            fields["amount"] = abs(fields["amount"])
        if fields.get("end_date") is not None and fields["end_date"] < current["start_date"]:
            raise ValueError("end_date must be on or after start_date")
        if "account_id" in fields and not get_account(conn, fields["account_id"], date.today()):
            raise NotFoundError("Account", fields["account_id"])
        if fields.get("category_id") is not None and not get_category_by_id(conn, fields["category_id"]):
            raise NotFoundError("Category", fields["category_id"])

        repo_update_recurring(conn, recurring_id, fields)
        log_activity(conn, "UPDATE", "RECURRING", f"Recurring transaction {recurring_id} updated",
                     entity_id=recurring_id, metadata=fields)
        return get_recurring_by_id(conn, recurring_id)
    finally:
        conn.close()


def set_active(recurring_id, is_active):
    """Pause or resume a recurring transaction."""
    return update_recurring(recurring_id, is_active=bool(is_active))


def delete_recurring(recurring_id):
    conn = get_db()
    try:
        row = get_recurring_by_id(conn, recurring_id)
        if not row:
            raise NotFoundError("Recurring transaction", recurring_id)
        repo_delete_recurring(conn, recurring_id)
        log_activity(conn, "DELETE", "RECURRING", f"Recurring transaction deleted: {row['name']}",
                     entity_id=recurring_id)
    finally:
        conn.close()


def process_due(today=None):
    """Materialize every due occurrence of active recurring transactions.

    For each active row with ``next_due_date <= today`` one transaction is
    inserted per occurrence in ``[next_due_date, today]``, then the row's
    ``next_due_date`` moves to the first occurrence after today. Rows whose next
    occurrence falls after their ``end_date`` (or whose frequency is unknown)
    are deactivated.

    Returns the number of transactions created.
    """
    today = today or date.today()
    created = 0

    conn = get_db()
    try:
        due_rows = get_all_recurring(conn, active_only=True, due_on_or_before=today)
        for row in due_rows:
            conn.begin()
            try:
                window_end = today
                if row["end_date"] is not None:
                    window_end = min(today, row["end_date"])
                anchor = cadence_anchor(row)
                occurrences = project_occurrences(
                    anchor, row["frequency"], row["next_due_date"], window_end,
                    max_iterations=MAX_ITERATIONS,
                )

                for occ in occurrences:
                    insert_transaction(
                        conn,
                        account_id=row["account_id"],
                        transaction_date=occ,
                        description=row["name"],
                        amount=signed_amount(row["amount"], row["type"]),
                        type=row["type"],
                        category_id=row["category_id"],
                        notes=row["notes"],
                        is_recurring=True,
                        recurring_id=row["id"],
                    )

                # a capped run resumes from the day after the last materialized date
                resume_after = occurrences[-1] if len(occurrences) >= MAX_ITERATIONS else today
                next_due = next_occurrence(anchor, row["frequency"], resume_after)
                fields = {}
                if next_due is None or (row["end_date"] is not None and next_due > row["end_date"]):
                    fields["is_active"] = False
                if next_due is not None:
                    fields["next_due_date"] = next_due
                repo_update_recurring(conn, row["id"], fields)

                if occurrences:
                    log_activity(
                        conn, "PROCESS", "RECURRING",
                        f"Processed {len(occurrences)} occurrence(s) of {row['name']}",
                        amount=signed_amount(row["amount"], row["type"]) * len(occurrences),
                        entity_id=row["id"],
                        metadata={"dates": [d.isoformat() for d in occurrences],
                                  "next_due_date": next_due},
                    )
                conn.commit()
            except Exception:
                conn.rollback()
                logging.error(f"Failed to process recurring transaction {row['id']}")
                raise
            created += len(occurrences)
    finally:
        conn.close()

    logging.info(f"Recurring processing created {created} transaction(s) as of {today}")
    return created


def upcoming(today=None, days=None):
    """Active recurring transactions with an occurrence in [today, today + days]."""
    today = today or date.today()
    days = config.UPCOMING_DAYS if days is None else days
    window_end = today + timedelta(days=days)

    items = []
    for row in list_recurring(active_only=True):
        dates = occurrences_for(row, today, window_end)
        if not dates:
            continue
        items.append({
            **row,
            "due_date": dates[0],
            "days_until": (dates[0] - today).days,
            "signed_amount": signed_amount(row["amount"], row["type"]),
        })
    items.sort(key=lambda item: (item["due_date"], item["id"]))
    return items


def subscriptions():
    """Active recurring expenses with their monthly-equivalent cost."""
    items = []
    for row in list_recurring(active_only=True):
        if row["type"] != "expense":
            continue
        items.append({
            "id": row["id"],
            "name": row["name"],
            "amount": row["amount"],
            "frequency": row["frequency"],
            "next_due_date": row["next_due_date"],
            "category_name": row["category_name"],
            "monthly_cost": to_money(monthly_equivalent(row["amount"], row["frequency"])),
        })
    return {
        "count": len(items),
        "total_monthly": to_money(sum(item["monthly_cost"] for item in items)),
        "subscriptions": items,
    }
