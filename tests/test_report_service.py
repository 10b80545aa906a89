"""Tests for reports, the activity log and the profile."""

from datetime import date

from services import activity_service, report_service, transaction_service

TODAY = date(2025, 3, 10)


def _tx(amount, type, day, category_id=None):
    transaction_service.add_transaction(
        amount=amount, description="tx", type=type, transaction_date=day, category_id=category_id,
    )


def test_income_vs_expenses_fills_empty_months():
    _tx(2000, "income", date(2025, 1, 3))
    _tx(500, "expense", date(2025, 1, 9))
    _tx(300, "expense", date(2025, 3, 2))

    report = report_service.income_vs_expenses(today=TODAY, months=3)
    assert [r["month"] for r in report] == ["2025-01", "2025-02", "2025-03"]
    assert report[0] == {"month": "2025-01", "label": "Jan 2025", "income": 2000.0,
                         "expenses": 500.0, "net": 1500.0}
    assert report[1]["net"] == 0.0
    assert report[2]["expenses"] == 300.0


def test_category_breakdown_shares(category_ids):
    _tx(75, "expense", date(2025, 3, 2), category_ids["Dining"])
    _tx(25, "expense", date(2025, 3, 3))
    _tx(999, "expense", date(2025, 2, 28), category_ids["Dining"])
    _tx(1000, "income", date(2025, 3, 1), category_ids["Salary"])

    breakdown = report_service.category_breakdown(2025, 3, today=TODAY)
    assert breakdown["month"] == "2025-03"
    assert breakdown["total"] == 100.0
    assert breakdown["categories"] == [
        {"category": "Dining", "total": 75.0, "share": 75.0},
        {"category": "Uncategorized", "total": 25.0, "share": 25.0},
    ]


def test_activity_log_is_paginated_newest_first():
    for day in (1, 2, 3):
        _tx(day, "expense", date(2025, 3, day))

    first = activity_service.list_activity(page=1, per_page=2)
    assert first["total"] == 3
    assert first["total_pages"] == 2
    assert [e["amount"] for e in first["entries"]] == [-3, -2]

    second = activity_service.list_activity(page=2, per_page=2)
    assert [e["amount"] for e in second["entries"]] == [-1]


def test_activity_metadata_round_trips_as_json():
    transaction_service.add_transaction(amount=10, description="Gym", type="expense",
                                        transaction_date=date(2025, 3, 1), recurring="weekly")
    entry = activity_service.list_activity()["entries"][0]
    assert entry["metadata"]["recurring"] == "weekly"
    assert isinstance(entry["metadata"]["recurring_id"], int)


def test_profile_update():
    profile = activity_service.update_profile("Sam Doe", "sam@example.com", "EUR")
    assert profile["full_name"] == "Sam Doe"
    assert profile["currency"] == "EUR"
    assert activity_service.get_profile()["email"] == "sam@example.com"
