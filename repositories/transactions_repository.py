from db import rows_to_dicts, row_to_dict

# -----------------------------
# Transactions Repository
# -----------------------------

_SELECT = """
    SELECT t.id, t.account_id, a.name AS account_name, t.category_id,
           c.name AS category_name, c.icon AS category_icon,
           t.transaction_date, t.description, t.amount, t.type, t.notes,
           t.is_recurring, t.recurring_id, t.created_at
    FROM transactions t
    JOIN accounts a ON t.account_id = a.id
    LEFT JOIN categories c ON t.category_id = c.id
"""

_ACTIVE_ACCOUNT_CLAUSE = "account_id IN (SELECT id FROM accounts WHERE is_active)"


def insert_transaction(conn, account_id, transaction_date, description, amount, type,
                       category_id=None, notes=None, is_recurring=False, recurring_id=None):
    """
    Inserts a transaction and returns its id.
    - conn: DuckDB connection (from get_db() or passed in)
    - amount: already signed (expense negative)
    """
    row = conn.execute(
        """
        INSERT INTO transactions
        (account_id, category_id, transaction_date, description, amount, type, notes,
         is_recurring, recurring_id)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (account_id, category_id, transaction_date, description, amount, type, notes,
         is_recurring, recurring_id)
    ).fetchone()
    return row[0]


def get_transaction_by_id(conn, transaction_id):
    return row_to_dict(conn.execute(_SELECT + " WHERE t.id = ?", [transaction_id]))


def get_all_transactions(conn, account_id=None, start_date=None, end_date=None,
                         type=None, category_id=None, limit=None, ascending=False):
    """
    Returns transactions matching the optional filters.
    - start_date / end_date: inclusive bounds on transaction_date
    - limit: optional, max number of rows
    """
    clauses = []
    params = []

    if account_id is not None:
        clauses.append("t.account_id = ?")
        params.append(account_id)
    if start_date is not None:
        clauses.append("t.transaction_date >= ?")
        params.append(start_date)
    if end_date is not None:
        clauses.append("t.transaction_date <= ?")
        params.append(end_date)
    if type is not None:
        clauses.append("t.type = ?")
        params.append(type)
    if category_id is not None:
        clauses.append("t.category_id = ?")
        params.append(category_id)

    query = _SELECT
    if clauses:
        query += " WHERE " + " AND ".join(clauses)

    direction = "ASC" if ascending else "DESC"
    query += f" ORDER BY t.transaction_date {direction}, t.id {direction}"

    if limit:
        query += " LIMIT ?"
        params.append(limit)

    return rows_to_dicts(conn.execute(query, params))


def update_transaction(conn, transaction_id, fields: dict):
    """
    Updates the given columns of a transaction.
    - fields: column -> new value; only known columns are written
    """
    allowed = {"account_id", "category_id", "transaction_date", "description",
               "amount", "type", "notes"}
    updates = {k: v for k, v in fields.items() if k in allowed}
    if not updates:
        return

    assignments = ", ".join(f"{column} = ?" for column in updates)
    conn.execute(
        f"UPDATE transactions SET {assignments} WHERE id = ?",
        list(updates.values()) + [transaction_id]
    )


def delete_transaction(conn, transaction_id):
    conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))


def sum_amount(conn, account_id=None, start_date=None, end_date=None,
               after_date=None, active_accounts_only=False):
    """
    Sum of signed amounts.
    - end_date: inclusive upper bound
    - after_date: exclusive lower bound
    - active_accounts_only: skip transactions of deactivated accounts
    """
    clauses = []
    params = []
    if active_accounts_only:
        clauses.append(_ACTIVE_ACCOUNT_CLAUSE)
    if account_id is not None:
        clauses.append("account_id = ?")
        params.append(account_id)
    if start_date is not None:
        clauses.append("transaction_date >= ?")
        params.append(start_date)
    if after_date is not None:
        clauses.append("transaction_date > ?")
        params.append(after_date)
    if end_date is not None:
        clauses.append("transaction_date <= ?")
        params.append(end_date)

    query = "SELECT COALESCE(SUM(amount), 0) FROM transactions"
    if clauses:
        query += " WHERE " + " AND ".join(clauses)
    return conn.execute(query, params).fetchone()[0]


def daily_totals(conn, after_date, end_date, account_id=None, active_accounts_only=False):
    """Signed totals per day for today < date <= end_date."""
    query = """
        SELECT transaction_date, SUM(amount)
        FROM transactions
        WHERE transaction_date > ? AND transaction_date <= ?
    """
    params = [after_date, end_date]
    if active_accounts_only:
        query += " AND " + _ACTIVE_ACCOUNT_CLAUSE
    if account_id is not None:
        query += " AND account_id = ?"
        params.append(account_id)
    query += " GROUP BY transaction_date"
    return {row[0]: row[1] for row in conn.execute(query, params).fetchall()}


def monthly_income_expenses(conn, start_date, end_date):
    """Per-month income and expense totals (expenses as positive numbers)."""
    rows = conn.execute(
        """
        SELECT strftime(transaction_date, '%Y-%m') AS month,
               COALESCE(SUM(CASE WHEN type = 'income' THEN abs(amount) ELSE 0 END), 0) AS income,
               COALESCE(SUM(CASE WHEN type = 'expense' THEN abs(amount) ELSE 0 END), 0) AS expenses
        FROM transactions
        WHERE transaction_date >= ? AND transaction_date <= ?
        GROUP BY month
        ORDER BY month
        """,
        [start_date, end_date]
    ).fetchall()
    return [{"month": r[0], "income": r[1], "expenses": r[2]} for r in rows]


def spending_by_category(conn, start_date, end_date):
    rows = conn.execute(
        """
        SELECT COALESCE(c.name, 'Uncategorized') AS category, SUM(abs(t.amount)) AS total
        FROM transactions t
        LEFT JOIN categories c ON t.category_id = c.id
        WHERE t.type = 'expense'
          AND t.transaction_date >= ? AND t.transaction_date <= ?
        GROUP BY category
        ORDER BY total DESC
        """,
        [start_date, end_date]
    ).fetchall()
    return [{"category": r[0], "total": r[1]} for r in rows]


def category_spent(conn, category_id, start_date, end_date_exclusive):
    """Absolute expense total for a category in [start, end)."""
    return conn.execute(
        """
        SELECT COALESCE(SUM(abs(amount)), 0)
        FROM transactions
        WHERE type = 'expense'
          AND category_id = ?
          AND transaction_date >= ? AND transaction_date < ?
        """,
        [category_id, start_date, end_date_exclusive]
    ).fetchone()[0]
