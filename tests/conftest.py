"""Shared test fixtures: a fresh DuckDB file per test."""

import os
import tempfile
from pathlib import Path

os.environ.setdefault("BUDGET_LOG_FILE", str(Path(tempfile.gettempdir()) / "budget-tests.log"))

import pytest

import db


@pytest.fixture(autouse=True)
def fresh_db(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_FILE", str(tmp_path / "budget-test.duckdb"))
    db.init_db()
    yield db.DB_FILE


@pytest.fixture
def conn(fresh_db):
    connection = db.get_db()
    yield connection
    connection.close()


@pytest.fixture
def main_account_id(conn):
    return conn.execute(
        "SELECT id FROM accounts WHERE type = 'checking' ORDER BY id LIMIT 1"
    ).fetchone()[0]


@pytest.fixture
def category_ids(conn):
    rows = conn.execute("SELECT name, id FROM categories").fetchall()
    return {name: cid for name, cid in rows}


@pytest.fixture
def client(fresh_db):
    from fastapi.testclient import TestClient

    from main import app

    with TestClient(app) as test_client:
        yield test_client
