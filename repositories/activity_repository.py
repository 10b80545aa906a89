import json

from db import rows_to_dicts, row_to_dict


def insert_activity(conn, action_type, entity_type, description, amount=None,
                    entity_id=None, metadata=None):
    conn.execute(
        """
        INSERT INTO activity_logs (action_type, entity_type, entity_id, description, amount, metadata)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (action_type, entity_type, entity_id, description, amount,
         json.dumps(metadata, default=str) if metadata is not None else None)
    )


def count_activity(conn):
    return conn.execute("SELECT COUNT(*) FROM activity_logs").fetchone()[0]


def get_activity_page(conn, limit, offset):
    rows = rows_to_dicts(conn.execute(
        """
        SELECT id, action_type, entity_type, entity_id, description, amount, metadata, created_at
        FROM activity_logs
        ORDER BY created_at DESC, id DESC
        LIMIT ? OFFSET ?
        """,
        [limit, offset]
    ))
    for row in rows:
        row["metadata"] = json.loads(row["metadata"]) if row["metadata"] else None
    return rows


# -----------------------------
# Profile (single row, id = 1)
# -----------------------------

def get_profile(conn):
    return row_to_dict(conn.execute(
        "SELECT full_name, email, currency, updated_at FROM profile WHERE id = 1"
    ))


def update_profile(conn, full_name, email, currency):
    conn.execute(
        """
        UPDATE profile
        SET full_name = ?, email = ?, currency = ?, updated_at = now()
        WHERE id = 1
        """,
        (full_name, email, currency)
    )
