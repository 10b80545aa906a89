import logging
from datetime import date

from db import get_db
from repositories.accounts_repository import (
    get_account,
    get_or_create_main_account,
    get_or_create_savings_account,
)
from repositories.goals_repository import insert_savings_transfer, get_savings_transfers
from repositories.transactions_repository import insert_transaction
from services.activity_service import log_activity

MIN_SOURCE_BALANCE = 1.0


def transfer_savings(*, amount, transfer_type, description=None, today=None):
    """Move money between the main (checking) and savings accounts.

    The source account must hold at least ``MIN_SOURCE_BALANCE`` and at least
    ``amount``. Writes an expense on the source, an income on the destination,
    a savings_transfers row and an activity entry, all in one DB transaction.
    """
    today = today or date.today()
    if amount <= 0:
        raise ValueError("Transfer amount must be positive")

    conn = get_db()
    try:
        main_id = get_or_create_main_account(conn)
        savings_id = get_or_create_savings_account(conn)
        if transfer_type == "to_savings":
            source_id, dest_id = main_id, savings_id
        elif transfer_type == "from_savings":
            source_id, dest_id = savings_id, main_id
        else:
            raise ValueError(f"Unknown transfer type: {transfer_type}")

        source_balance = float(get_account(conn, source_id, today)["balance"])
        if source_balance < MIN_SOURCE_BALANCE:
            raise ValueError(f"Source account must have at least {MIN_SOURCE_BALANCE:.2f} to transfer")
        if amount > source_balance:
            raise ValueError(f"Cannot transfer {amount:.2f}. Maximum available: {source_balance:.2f}")

        label = "Transfer to savings" if transfer_type == "to_savings" else "Transfer from savings"
        text = description or label

        conn.begin()
        insert_transaction(conn, source_id, today, text, -amount, "expense", notes=description)
        insert_transaction(conn, dest_id, today, text, amount, "income", notes=description)
        transfer_id = insert_savings_transfer(conn, amount, transfer_type, description)
        log_activity(
            conn, "TRANSFER", "SAVINGS_TRANSFER", f"{label}: {amount:.2f}",
            amount=-amount if transfer_type == "to_savings" else amount,
            entity_id=transfer_id,
            metadata={"transfer_type": transfer_type, "amount": amount, "description": description},
        )
        conn.commit()
    except ValueError as e:
        logging.warning(f"Savings transfer rejected: {e}")
        raise
    finally:
        conn.close()

    return {
        "id": transfer_id,
        "amount": amount,
        "transfer_type": transfer_type,
        "description": description,
        "transaction_date": today,
    }


def list_transfers(limit=None):
    conn = get_db()
    try:
        return get_savings_transfers(conn, limit=limit)
    finally:
        conn.close()
