from datetime import date

from db import get_db
from repositories.accounts_repository import (
    list_accounts as repo_list_accounts,
    get_account as repo_get_account,
    insert_account,
    update_account as repo_update_account,
    get_total_balance,
)
from repositories.categories_repository import (
    get_all_categories,
    add_category,
    delete_category as repo_delete_category,
    get_category_by_id,
)
from services.activity_service import log_activity
from services.errors import NotFoundError
from utils.money import to_money


def _with_rounded_balance(account):
    account["balance"] = to_money(account["balance"])
    return account


def list_accounts(today=None, include_inactive=False):
    """Return accounts with their ledger balance as of ``today``.

    Opens and closes a database connection on the caller's behalf.
    """
    today = today or date.today()
    conn = get_db()
    try:
        accounts = repo_list_accounts(conn, today, include_inactive=include_inactive)
        return [_with_rounded_balance(a) for a in accounts]
    finally:
        conn.close()


def get_account(account_id, today=None):
    today = today or date.today()
    conn = get_db()
    try:
        account = repo_get_account(conn, account_id, today)
    finally:
        conn.close()
    if not account:
        raise NotFoundError("Account", account_id)
    return _with_rounded_balance(account)


def create_account(*, name, type, currency="USD", opening_balance=0.0):
    conn = get_db()
    try:
        account_id = insert_account(conn, name, type, currency=currency,
                                    opening_balance=opening_balance)
        log_activity(conn, "CREATE", "ACCOUNT", f"Account created: {name}",
                     amount=opening_balance, entity_id=account_id)
    finally:
        conn.close()
    return get_account(account_id)


def update_account(account_id, name=None, is_active=None):
    get_account(account_id)
    conn = get_db()
    try:
        repo_update_account(conn, account_id, name=name, is_active=is_active)
        log_activity(conn, "UPDATE", "ACCOUNT", f"Account {account_id} updated",
                     entity_id=account_id,
                     metadata={"name": name, "is_active": is_active})
    finally:
        conn.close()
    return get_account(account_id)


def total_balance(today=None):
    today = today or date.today()
    conn = get_db()
    try:
        return to_money(get_total_balance(conn, today))
    finally:
        conn.close()


# -----------------------------
# Categories
# -----------------------------

def list_categories():
    conn = get_db()
    try:
        return get_all_categories(conn)
    finally:
        conn.close()


def create_category(*, name, icon=None, color=None, parent_id=None):
    conn = get_db()
    try:
        if parent_id is not None and not get_category_by_id(conn, parent_id):
            raise NotFoundError("Category", parent_id)
        category_id = add_category(conn, name, icon=icon, color=color, parent_id=parent_id)
        return get_category_by_id(conn, category_id)
    finally:
        conn.close()


def delete_category(category_id):
    conn = get_db()
    try:
        category = get_category_by_id(conn, category_id)
        if not category:
            raise NotFoundError("Category", category_id)
        if category["is_system"]:
            raise ValueError("System categories cannot be deleted")
        repo_delete_category(conn, category_id)
    finally:
        conn.close()
