from db import rows_to_dicts, row_to_dict

# -----------------------------
# Budgets Repository
# -----------------------------

UPDATABLE_COLUMNS = {"name", "category_id", "amount", "period", "alert_threshold", "is_active"}


def insert_budget(conn, name, category_id, amount, period, alert_threshold, start_date):
    row = conn.execute(
        """
        INSERT INTO budgets (name, category_id, amount, period, alert_threshold, start_date)
        VALUES (?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (name, category_id, amount, period, alert_threshold, start_date)
    ).fetchone()
    return row[0]


def get_budget_by_id(conn, budget_id):
    return row_to_dict(conn.execute(
        """
        SELECT b.*, c.name AS category_name, c.icon AS category_icon
        FROM budgets b
        LEFT JOIN categories c ON b.category_id = c.id
        WHERE b.id = ?
        """,
        [budget_id]
    ))


def get_all_budgets(conn, active_only=True):
    query = """
        SELECT b.*, c.name AS category_name, c.icon AS category_icon
        FROM budgets b
        LEFT JOIN categories c ON b.category_id = c.id
    """
    if active_only:
        query += " WHERE b.is_active"
    query += " ORDER BY b.name"
    return rows_to_dicts(conn.execute(query))


def update_budget(conn, budget_id, fields: dict):
    updates = {k: v for k, v in fields.items() if k in UPDATABLE_COLUMNS}
    if not updates:
        return

    assignments = ", ".join(f"{column} = ?" for column in updates)
    conn.execute(
        f"UPDATE budgets SET {assignments} WHERE id = ?",
        list(updates.values()) + [budget_id]
    )


def delete_budget(conn, budget_id):
    conn.execute("DELETE FROM budget_periods WHERE budget_id = ?", (budget_id,))
    conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))


# -----------------------------
# Budget periods
# -----------------------------

def insert_period(conn, budget_id, period_start, period_end, budgeted_amount, is_current=True):
    row = conn.execute(
        """
        INSERT INTO budget_periods (budget_id, period_start, period_end, budgeted_amount, is_current)
        VALUES (?, ?, ?, ?, ?)
        RETURNING id
        """,
        (budget_id, period_start, period_end, budgeted_amount, is_current)
    ).fetchone()
    return row[0]


def get_current_periods(conn):
    """Current periods joined with their (active) budget and category."""
    return rows_to_dicts(conn.execute("""
        SELECT p.id, p.budget_id, p.period_start, p.period_end, p.budgeted_amount,
               b.name, b.period, b.alert_threshold, b.category_id, b.amount,
               b.start_date AS budget_start,
               c.name AS category_name, c.icon AS category_icon
        FROM budget_periods p
        JOIN budgets b ON p.budget_id = b.id
        LEFT JOIN categories c ON b.category_id = c.id
        WHERE p.is_current AND b.is_active
        ORDER BY p.period_start, b.name
    """))


def close_period(conn, period_id):
    conn.execute("UPDATE budget_periods SET is_current = FALSE WHERE id = ?", (period_id,))


def update_current_period_amount(conn, budget_id, budgeted_amount):
    conn.execute(
        "UPDATE budget_periods SET budgeted_amount = ? WHERE budget_id = ? AND is_current",
        (budgeted_amount, budget_id)
    )
