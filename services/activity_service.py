import logging
from math import ceil

import config
from db import get_db
from repositories.activity_repository import (
    insert_activity,
    count_activity,
    get_activity_page,
    get_profile as repo_get_profile,
    update_profile as repo_update_profile,
)


def log_activity(conn, action_type, entity_type, description, amount=None,
                 entity_id=None, metadata=None):
    """Record a user-visible activity entry on the caller's connection."""
    insert_activity(
        conn,
        action_type=action_type,
        entity_type=entity_type,
        description=description,
        amount=amount,
        entity_id=entity_id,
        metadata=metadata,
    )
    logging.info(f"{action_type} {entity_type} {entity_id or ''}: {description}")


def list_activity(page=1, per_page=None):
    """Newest-first activity log, paginated."""
    per_page = per_page or config.LOGS_PER_PAGE
    page = max(int(page), 1)

    conn = get_db()
    try:
        total = count_activity(conn)
        entries = get_activity_page(conn, per_page, (page - 1) * per_page)
    finally:
        conn.close()

    return {
        "page": page,
        "per_page": per_page,
        "total": total,
        "total_pages": ceil(total / per_page) if total else 0,
        "entries": entries,
    }


def get_profile():
    conn = get_db()
    try:
        return repo_get_profile(conn)
    finally:
        conn.close()


def update_profile(full_name, email, currency):
    conn = get_db()
    try:
        repo_update_profile(conn, full_name, email, currency)
        log_activity(conn, "UPDATE", "PROFILE", "Profile updated",
                     metadata={"currency": currency})
        return repo_get_profile(conn)
    finally:
        conn.close()
