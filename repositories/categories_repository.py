from db import rows_to_dicts, row_to_dict


def get_all_categories(conn):
    """
    Return all categories sorted by name, system categories included.

    Args:
        conn: Database connection.

    Returns:
        List of category dicts with 'id', 'name', 'icon', 'color',
        'parent_id' and 'is_system' keys.
    """
    return rows_to_dicts(conn.execute("""
        SELECT id, name, icon, color, parent_id, is_system
        FROM categories
        ORDER BY name
    """))


def get_category_by_id(conn, category_id):
    """
    Return a single category by ID.

    Args:
        conn: Database connection.
        category_id: ID of the category to fetch.

    Returns:
        Category dict or None if not found.
    """
    return row_to_dict(conn.execute(
        "SELECT id, name, icon, color, parent_id, is_system FROM categories WHERE id = ?",
        (category_id,)
    ))


def add_category(conn, name, icon=None, color=None, parent_id=None):
    """
    Insert a new user category and return its id.

    Args:
        conn: Database connection.
        name: Display name.
        icon: Optional emoji/icon string.
        color: Optional hex colour.
        parent_id: Optional parent category.
    """
    row = conn.execute(
        """
        INSERT INTO categories (name, icon, color, parent_id)
        VALUES (?, ?, ?, ?)
        RETURNING id
        """,
        (name, icon, color, parent_id)
    ).fetchone()
    return row[0]


def delete_category(conn, category_id):
    """
    Delete a user category by ID. System categories are left alone.

    Args:
        conn: Database connection.
        category_id: ID of the category to delete.
    """
    conn.execute(
        "DELETE FROM categories WHERE id = ? AND NOT is_system",
        (category_id,)
    )
