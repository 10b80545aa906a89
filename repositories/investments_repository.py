from datetime import datetime

from db import rows_to_dicts, row_to_dict

UPDATABLE_COLUMNS = {"name", "symbol", "investment_type", "quantity", "purchase_price",
                     "purchase_date", "current_price", "notes"}


def insert_investment(conn, name, investment_type, purchase_price, purchase_date,
                      quantity=1.0, symbol=None, current_price=None, notes=None):
    last_updated = datetime.now() if current_price is not None else None
    row = conn.execute(
        """
        INSERT INTO investments
        (name, symbol, investment_type, quantity, purchase_price, purchase_date,
         current_price, last_updated, notes)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        (name, symbol, investment_type, quantity, purchase_price, purchase_date,
         current_price, last_updated, notes)
    ).fetchone()
    return row[0]


def get_investment_by_id(conn, investment_id):
    return row_to_dict(conn.execute("SELECT * FROM investments WHERE id = ?", [investment_id]))


def get_all_investments(conn):
    return rows_to_dicts(conn.execute(
        "SELECT * FROM investments ORDER BY created_at DESC, id DESC"
    ))


def update_investment(conn, investment_id, fields: dict):
    updates = {k: v for k, v in fields.items() if k in UPDATABLE_COLUMNS}
    if not updates:
        return

    assignments = ", ".join(f"{column} = ?" for column in updates)
    if "current_price" in updates:
        assignments += ", last_updated = now()"
    conn.execute(
        f"UPDATE investments SET {assignments} WHERE id = ?",
        list(updates.values()) + [investment_id]
    )


def delete_investment(conn, investment_id):
    conn.execute("DELETE FROM investments WHERE id = ?", (investment_id,))
