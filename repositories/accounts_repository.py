from datetime import date

from db import rows_to_dicts, row_to_dict

# -----------------------------
# Accounts Repository
# -----------------------------

MAIN_ACCOUNT_NAME = "Main Account"
SAVINGS_ACCOUNT_NAME = "Savings Account"

_BALANCE_SELECT = """
    SELECT a.id, a.name, a.type, a.currency, a.opening_balance, a.is_active, a.created_at,
           a.opening_balance + COALESCE(SUM(t.amount), 0) AS balance
    FROM accounts a
    LEFT JOIN transactions t
      ON t.account_id = a.id AND t.transaction_date <= ?
"""


def list_accounts(conn, as_of: date, include_inactive=False):
    """Return accounts as dicts with their ledger balance as of ``as_of``."""
    query = _BALANCE_SELECT
    if not include_inactive:
        query += " WHERE a.is_active"
    query += """
    GROUP BY a.id, a.name, a.type, a.currency, a.opening_balance, a.is_active, a.created_at
    ORDER BY a.name
    """
    return rows_to_dicts(conn.execute(query, [as_of]))


def get_account(conn, account_id, as_of: date):
    query = _BALANCE_SELECT + """
    WHERE a.id = ?
    GROUP BY a.id, a.name, a.type, a.currency, a.opening_balance, a.is_active, a.created_at
    """
    return row_to_dict(conn.execute(query, [as_of, account_id]))


def insert_account(conn, name, type, currency="USD", opening_balance=0.0):
    row = conn.execute(
        """
        INSERT INTO accounts (name, type, currency, opening_balance)
        VALUES (?, ?, ?, ?)
        RETURNING id
        """,
        (name, type, currency, opening_balance)
    ).fetchone()
    return row[0]


def update_account(conn, account_id, name=None, is_active=None):
    """
    Updates the mutable fields of an account.
    - name: new display name, left untouched if None
    - is_active: new active flag, left untouched if None
    """
    if name is not None:
        conn.execute("UPDATE accounts SET name = ? WHERE id = ?", (name, account_id))
    if is_active is not None:
        conn.execute("UPDATE accounts SET is_active = ? WHERE id = ?", (is_active, account_id))


def _get_or_create_by_type(conn, account_type, default_name, currency):
    row = conn.execute(
        "SELECT id FROM accounts WHERE type = ? AND is_active ORDER BY id LIMIT 1",
        (account_type,)
    ).fetchone()
    if row:
        return row[0]

    # not found; create on the fly
    return insert_account(conn, default_name, account_type, currency=currency)


def get_or_create_main_account(conn, currency="USD"):
    """Return the id of the first active checking account, creating one if missing."""
    return _get_or_create_by_type(conn, "checking", MAIN_ACCOUNT_NAME, currency)


def get_or_create_savings_account(conn, currency="USD"):
    return _get_or_create_by_type(conn, "savings", SAVINGS_ACCOUNT_NAME, currency)


def get_total_balance(conn, as_of: date):
    return conn.execute(
        """
        SELECT COALESCE((SELECT SUM(opening_balance) FROM accounts WHERE is_active), 0)
             + COALESCE((SELECT SUM(t.amount)
                         FROM transactions t
                         JOIN accounts a ON t.account_id = a.id
                         WHERE a.is_active AND t.transaction_date <= ?), 0)
        """,
        [as_of]
    ).fetchone()[0]
