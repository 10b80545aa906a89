from db import rows_to_dicts, row_to_dict


def insert_goal(conn, name, target_amount, target_date=None, monthly_contribution=None,
                description=None, current_amount=0.0):
    row = conn.execute(
        """
        INSERT INTO savings_goals
        (name, target_amount, current_amount, target_date, monthly_contribution, description)
        VALUES (?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (name, target_amount, current_amount, target_date, monthly_contribution, description)
    ).fetchone()
    return row[0]


def get_goal_by_id(conn, goal_id):
    return row_to_dict(conn.execute("SELECT * FROM savings_goals WHERE id = ?", [goal_id]))


def get_all_goals(conn, active_only=True):
    query = "SELECT * FROM savings_goals"
    if active_only:
        query += " WHERE is_active"
    query += " ORDER BY created_at DESC, id DESC"
    return rows_to_dicts(conn.execute(query))


def add_to_current_amount(conn, goal_id, delta):
    conn.execute(
        "UPDATE savings_goals SET current_amount = current_amount + ? WHERE id = ?",
        (delta, goal_id)
    )


def set_goal_active(conn, goal_id, is_active):
    conn.execute("UPDATE savings_goals SET is_active = ? WHERE id = ?", (is_active, goal_id))


def insert_goal_transaction(conn, goal_id, amount, transaction_type, description=None):
    row = conn.execute(
        """
        INSERT INTO savings_goal_transactions (goal_id, amount, transaction_type, description)
        VALUES (?, ?, ?, ?)
        RETURNING id
        """,
        (goal_id, amount, transaction_type, description)
    ).fetchone()
    return row[0]


def get_goal_transactions(conn, goal_id):
    return rows_to_dicts(conn.execute(
        """
        SELECT id, goal_id, amount, transaction_type, description, created_at
        FROM savings_goal_transactions
        WHERE goal_id = ?
        ORDER BY created_at DESC, id DESC
        """,
        [goal_id]
    ))


def insert_savings_transfer(conn, amount, transfer_type, description=None):
    row = conn.execute(
        """
        INSERT INTO savings_transfers (amount, transfer_type, description)
        VALUES (?, ?, ?)
        RETURNING id
        """,
        (amount, transfer_type, description)
    ).fetchone()
    return row[0]


def get_savings_transfers(conn, limit=None):
    query = """
        SELECT id, amount, transfer_type, description, created_at
        FROM savings_transfers
        ORDER BY created_at DESC, id DESC
    """
    params = []
    if limit:
        query += " LIMIT ?"
        params.append(limit)
    return rows_to_dicts(conn.execute(query, params))
