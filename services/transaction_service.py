import logging
from datetime import date

from db import get_db
from repositories.accounts_repository import get_account, get_or_create_main_account
from repositories.categories_repository import get_category_by_id
from repositories.recurring_repository import insert_recurring
from repositories.transactions_repository import (
    get_all_transactions as repo_get_all_transactions,
    get_transaction_by_id as repo_get_transaction_by_id,
    insert_transaction as repo_insert_transaction,
    update_transaction as repo_update_transaction,
    delete_transaction as repo_delete_transaction,
)
from services.activity_service import log_activity
from services.errors import NotFoundError
from services.recurrence_service import FREQUENCY_STEPS, next_occurrence, normalize_frequency
from utils.money import signed_amount, to_money


def _resolve_account(conn, account_id):
    if account_id is None:
        return get_or_create_main_account(conn)
    if not get_account(conn, account_id, date.today()):
        raise NotFoundError("Account", account_id)
    return account_id


def _check_category(conn, category_id):
    if category_id is not None and not get_category_by_id(conn, category_id):
        raise NotFoundError("Category", category_id)


def get_all_transactions(account_id=None, start_date=None, end_date=None,
                         type=None, category_id=None, limit=None):
    """Return transactions, newest first, optionally filtered.

    Opens and closes a database connection on the caller's behalf.
    """
    conn = get_db()
    try:
        return repo_get_all_transactions(
            conn,
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            type=type,
            category_id=category_id,
            limit=limit,
        )
    finally:
        conn.close()


def get_transaction(transaction_id):
    conn = get_db()
    try:
        tx = repo_get_transaction_by_id(conn, transaction_id)
    finally:
        conn.close()
    if not tx:
        raise NotFoundError("Transaction", transaction_id)
    return tx


def add_transaction(*, amount, description, type, transaction_date=None,
                    account_id=None, category_id=None, notes=None,
                    recurring="no", recurring_end=None):
    """Service wrapper around repository insert.

    ``amount`` is the positive magnitude; the stored amount is negative for
    expenses. When ``account_id`` is omitted the main checking account is used.

    A ``recurring`` frequency other than ``"no"`` also creates a recurring
    transaction whose first projected due date is the occurrence after this one.
    """
    transaction_date = transaction_date or date.today()
    if recurring and recurring != "no" and normalize_frequency(recurring) not in FREQUENCY_STEPS:
        raise ValueError(f"Unknown recurring frequency: {recurring}")
    conn = get_db()
    try:
        account_id = _resolve_account(conn, account_id)
        _check_category(conn, category_id)

        recurring_id = None
        if recurring and recurring != "no":
            if recurring_end is not None and recurring_end < transaction_date:
                raise ValueError("Recurring end date must be on or after the transaction date")
            recurring_id = insert_recurring(
                conn,
                account_id=account_id,
                name=description,
                amount=abs(amount),
                type=type,
                frequency=recurring,
                start_date=transaction_date,
                next_due_date=next_occurrence(transaction_date, recurring, transaction_date),
                end_date=recurring_end,
                category_id=category_id,
                notes=notes,
            )

        transaction_id = repo_insert_transaction(
            conn,
            account_id=account_id,
            transaction_date=transaction_date,
            description=description,
            amount=signed_amount(amount, type),
            type=type,
            category_id=category_id,
            notes=notes,
            is_recurring=recurring_id is not None,
            recurring_id=recurring_id,
        )
        log_activity(conn, "CREATE", "TRANSACTION", f"{type.title()}: {description}",
                     amount=signed_amount(amount, type), entity_id=transaction_id,
                     metadata={"recurring": recurring, "recurring_id": recurring_id})
        return repo_get_transaction_by_id(conn, transaction_id)
    finally:
        conn.close()


def update_transaction(transaction_id, **changes):
    """Apply partial changes; amount/type are re-signed together."""
    conn = get_db()
    try:
        current = repo_get_transaction_by_id(conn, transaction_id)
        if not current:
            raise NotFoundError("Transaction", transaction_id)

        fields = {k: v for k, v in changes.items() if v is not None}
        if "account_id" in fields:
            _resolve_account(conn, fields["account_id"])
        if "category_id" in fields:
            _check_category(conn, fields["category_id"])

        if "amount" in fields or "type" in fields:
            tx_type = fields.get("type", current["type"])
            magnitude = fields.get("amount", abs(current["amount"]))
            fields["amount"] = signed_amount(magnitude, tx_type)
            fields["type"] = tx_type

        repo_update_transaction(conn, transaction_id, fields)
        updated = repo_get_transaction_by_id(conn, transaction_id)
        log_activity(conn, "UPDATE", "TRANSACTION", f"Transaction updated: {updated['description']}",
                     amount=updated["amount"], entity_id=transaction_id,
                     metadata={"old": {k: current[k] for k in fields},
                               "new": fields})
        return updated
    finally:
        conn.close()


def delete_transaction(transaction_id):
    conn = get_db()
    try:
        current = repo_get_transaction_by_id(conn, transaction_id)
        if not current:
            raise NotFoundError("Transaction", transaction_id)
        repo_delete_transaction(conn, transaction_id)
        log_activity(conn, "DELETE", "TRANSACTION", f"Transaction deleted: {current['description']}",
                     amount=current["amount"], entity_id=transaction_id)
    finally:
        conn.close()
    logging.info(f"Transaction {transaction_id} deleted")


def summarize(transactions):
    """Income / expense / net totals over a list of transaction dicts."""
    income = sum(t["amount"] for t in transactions if t["type"] == "income")
    expenses = sum(abs(t["amount"]) for t in transactions if t["type"] == "expense")
    return {
        "income": to_money(income),
        "expenses": to_money(expenses),
        "net": to_money(income - expenses),
        "count": len(transactions),
    }
