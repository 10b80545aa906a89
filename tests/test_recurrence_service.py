"""
Tests for services/recurrence_service.py

Covers:
  - calendar-aware stepping (month-end clipping, leap days)
  - ordering and the iteration cap
  - empty / inverted windows and unknown frequencies
  - skipping ahead from anchors far before the window
  - next_occurrence, cadence_anchor and occurrences_for on stored rows
"""

from datetime import date, timedelta

import pytest

from services.recurrence_service import (
    MAX_ITERATIONS,
    cadence_anchor,
    monthly_equivalent,
    next_occurrence,
    occurrences_for,
    project_occurrences,
)


# ── Calendar stepping ────────────────────────────────────────────────────────

def test_monthly_from_month_end_clips_then_restores_day():
    dates = project_occurrences(date(2024, 1, 31), "monthly", date(2024, 1, 1), date(2024, 5, 31))
    assert dates == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
        date(2024, 5, 31),
    ]


def test_monthly_keeps_anchor_day_of_month():
    anchor = date(2023, 3, 15)
    dates = project_occurrences(anchor, "monthly", anchor, date(2025, 3, 15))
    assert len(dates) == 25
    assert all(d.day == 15 for d in dates)


def test_yearly_leap_day_anchor():
    dates = project_occurrences(date(2024, 2, 29), "yearly", date(2024, 1, 1), date(2028, 12, 31))
    assert dates == [
        date(2024, 2, 29),
        date(2025, 2, 28),
        date(2026, 2, 28),
        date(2027, 2, 28),
        date(2028, 2, 29),
    ]


def test_quarterly_clips_to_shorter_months():
    dates = project_occurrences(date(2024, 11, 30), "quarterly", date(2025, 1, 1), date(2025, 12, 31))
    assert dates == [
        date(2025, 2, 28),
        date(2025, 5, 30),
        date(2025, 8, 30),
        date(2025, 11, 30),
    ]


def test_biweekly_window_in_the_middle():
    dates = project_occurrences(date(2024, 1, 1), "biweekly", date(2024, 1, 10), date(2024, 2, 10))
    assert dates == [date(2024, 1, 15), date(2024, 1, 29)]


def test_weekly_includes_window_bounds():
    dates = project_occurrences(date(2025, 6, 2), "weekly", date(2025, 6, 9), date(2025, 6, 23))
    assert dates == [date(2025, 6, 9), date(2025, 6, 16), date(2025, 6, 23)]


@pytest.mark.parametrize("frequency", ["daily", "weekly", "biweekly", "monthly", "quarterly", "yearly"])
def test_dates_strictly_increasing_and_inside_window(frequency):
    anchor = date(2024, 1, 31)
    start, end = date(2024, 3, 1), date(2027, 3, 1)
    dates = project_occurrences(anchor, frequency, start, end)

    assert dates
    assert all(a < b for a, b in zip(dates, dates[1:]))
    assert all(start <= d <= end and d >= anchor for d in dates)
    assert len(dates) <= MAX_ITERATIONS


def test_frequency_is_trimmed_and_case_insensitive():
    dates = project_occurrences(date(2025, 1, 1), "  Monthly ", date(2025, 1, 1), date(2025, 3, 1))
    assert dates == [date(2025, 1, 1), date(2025, 2, 1), date(2025, 3, 1)]


def test_accepts_iso_strings():
    dates = project_occurrences("2025-01-10", "weekly", "2025-01-01", "2025-01-20")
    assert dates == [date(2025, 1, 10), date(2025, 1, 17)]


# ── Cap and termination ──────────────────────────────────────────────────────

def test_daily_projection_is_capped():
    dates = project_occurrences(date(2024, 1, 1), "daily", date(2024, 1, 1), date(2024, 12, 31))
    assert len(dates) == MAX_ITERATIONS
    assert dates[-1] == date(2024, 4, 9)


def test_custom_cap():
    dates = project_occurrences(date(2024, 1, 1), "daily", date(2024, 1, 1), date(2024, 12, 31),
                                max_iterations=5)
    assert dates == [date(2024, 1, 1) + timedelta(days=i) for i in range(5)]


def test_far_past_anchor_skips_ahead_to_window():
    dates = project_occurrences(date(2000, 1, 15), "monthly", date(2026, 3, 1), date(2026, 5, 31))
    assert dates == [date(2026, 3, 15), date(2026, 4, 15), date(2026, 5, 15)]


def test_far_past_daily_anchor_fills_window():
    dates = project_occurrences(date(1990, 1, 1), "daily", date(2025, 2, 1), date(2025, 2, 28))
    assert len(dates) == 28
    assert dates[0] == date(2025, 2, 1)


# ── Empty windows and unknown frequencies ────────────────────────────────────

def test_inverted_window_is_empty():
    assert project_occurrences(date(2025, 1, 1), "daily", date(2025, 2, 1), date(2025, 1, 1)) == []


def test_window_before_anchor_is_empty():
    assert project_occurrences(date(2025, 6, 1), "monthly", date(2025, 1, 1), date(2025, 5, 31)) == []


def test_unknown_frequency_returns_anchor_when_in_window():
    dates = project_occurrences(date(2025, 1, 10), "fortnightly-ish", date(2025, 1, 1), date(2025, 1, 31))
    assert dates == [date(2025, 1, 10)]


def test_unknown_frequency_outside_window_is_empty():
    dates = project_occurrences(date(2024, 12, 10), "sometimes", date(2025, 1, 1), date(2025, 1, 31))
    assert dates == []


def test_missing_frequency_does_not_loop():
    assert project_occurrences(date(2025, 1, 1), None, date(2025, 1, 1), date(2025, 12, 31)) == [date(2025, 1, 1)]


# ── next_occurrence ──────────────────────────────────────────────────────────

def test_next_occurrence_after_clipped_month():
    assert next_occurrence(date(2025, 1, 31), "monthly", date(2025, 2, 28)) == date(2025, 3, 31)


def test_next_occurrence_is_strictly_after():
    assert next_occurrence(date(2025, 1, 1), "weekly", date(2025, 1, 1)) == date(2025, 1, 8)


def test_next_occurrence_before_anchor_returns_anchor():
    assert next_occurrence(date(2025, 5, 1), "monthly", date(2025, 1, 1)) == date(2025, 5, 1)


def test_next_occurrence_unknown_frequency():
    assert next_occurrence(date(2025, 5, 1), "hourly", date(2025, 1, 1)) is None


# ── Stored rows ──────────────────────────────────────────────────────────────

def _row(**overrides):
    row = {
        "start_date": date(2025, 1, 31),
        "next_due_date": date(2025, 1, 31),
        "frequency": "monthly",
        "end_date": None,
        "is_active": True,
    }
    row.update(overrides)
    return row


def test_cadence_anchor_restores_start_date():
    assert cadence_anchor(_row(next_due_date=date(2025, 4, 30))) == date(2025, 1, 31)


def test_cadence_anchor_uses_moved_due_date():
    assert cadence_anchor(_row(next_due_date=date(2025, 4, 20))) == date(2025, 4, 20)


def test_occurrences_for_keeps_month_end_after_processing():
    dates = occurrences_for(_row(next_due_date=date(2025, 4, 30)), date(2025, 4, 1), date(2025, 6, 30))
    assert dates == [date(2025, 4, 30), date(2025, 5, 31), date(2025, 6, 30)]


def test_occurrences_for_respects_end_date():
    dates = occurrences_for(_row(end_date=date(2025, 3, 15)), date(2025, 1, 1), date(2025, 12, 31))
    assert dates == [date(2025, 1, 31), date(2025, 2, 28)]


def test_occurrences_for_inactive_row():
    assert occurrences_for(_row(is_active=False), date(2025, 1, 1), date(2025, 12, 31)) == []


def test_occurrences_for_never_before_next_due():
    dates = occurrences_for(_row(next_due_date=date(2025, 3, 31)), date(2025, 1, 1), date(2025, 3, 31))
    assert dates == [date(2025, 3, 31)]


# ── Monthly equivalent ───────────────────────────────────────────────────────

@pytest.mark.parametrize("frequency, expected", [
    ("monthly", 12.0),
    ("yearly", 1.0),
    ("quarterly", 4.0),
    ("weekly", 52.0),
])
def test_monthly_equivalent(frequency, expected):
    assert monthly_equivalent(12, frequency) == pytest.approx(expected)


def test_monthly_equivalent_unknown_frequency():
    assert monthly_equivalent(50, "never") == 0.0
