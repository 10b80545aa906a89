from db import rows_to_dicts, row_to_dict

# -----------------------------
# Recurring Transactions Repository
# -----------------------------

_SELECT = """
    SELECT r.id, r.account_id, a.name AS account_name, r.category_id,
           c.name AS category_name, c.icon AS category_icon,
           r.name, r.amount, r.type, r.frequency, r.start_date, r.next_due_date,
           r.end_date, r.notes, r.is_active, r.created_at
    FROM recurring_transactions r
    JOIN accounts a ON r.account_id = a.id
    LEFT JOIN categories c ON r.category_id = c.id
"""

UPDATABLE_COLUMNS = {"account_id", "category_id", "name", "amount", "type", "frequency",
                     "next_due_date", "end_date", "notes", "is_active"}


def insert_recurring(conn, account_id, name, amount, type, frequency, start_date,
                     next_due_date, end_date=None, category_id=None, notes=None):
    row = conn.execute(
        """
        INSERT INTO recurring_transactions
        (account_id, category_id, name, amount, type, frequency, start_date,
         next_due_date, end_date, notes)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (account_id, category_id, name, amount, type, frequency, start_date,
         next_due_date, end_date, notes)
    ).fetchone()
    return row[0]


def get_recurring_by_id(conn, recurring_id):
    return row_to_dict(conn.execute(_SELECT + " WHERE r.id = ?", [recurring_id]))


def get_all_recurring(conn, active_only=False, due_on_or_before=None, active_accounts_only=False):
    """
    Returns recurring transactions ordered by next due date.
    - active_only: skip paused rows
    - active_accounts_only: skip rows whose account is deactivated
    - due_on_or_before: only rows whose next_due_date <= this date
    """
    clauses = []
    params = []
    if active_only:
        clauses.append("r.is_active")
    if active_accounts_only:
        clauses.append("a.is_active")
    if due_on_or_before is not None:
        clauses.append("r.next_due_date <= ?")
        params.append(due_on_or_before)

    query = _SELECT
    if clauses:
        query += " WHERE " + " AND ".join(clauses)
    query += " ORDER BY r.next_due_date, r.id"
    return rows_to_dicts(conn.execute(query, params))


def update_recurring(conn, recurring_id, fields: dict):
    updates = {k: v for k, v in fields.items() if k in UPDATABLE_COLUMNS}
    if not updates:
        return

    assignments = ", ".join(f"{column} = ?" for column in updates)
    conn.execute(
        f"UPDATE recurring_transactions SET {assignments} WHERE id = ?",
        list(updates.values()) + [recurring_id]
    )


def delete_recurring(conn, recurring_id):
    conn.execute("DELETE FROM recurring_transactions WHERE id = ?", (recurring_id,))
