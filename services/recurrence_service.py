"""
Recurrence engine: projects recurring transactions onto calendar dates.

Pure functions: no database access, no side effects. Every caller (calendar,
balance projection, due processing, upcoming list) goes through
``project_occurrences`` so the stepping rules live in one place.
"""
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from utils.dates import parse_date

MAX_ITERATIONS = 100

FREQUENCY_STEPS = {
    "daily": relativedelta(days=1),
    "weekly": relativedelta(days=7),
    "biweekly": relativedelta(days=14),
    "monthly": relativedelta(months=1),
    "quarterly": relativedelta(months=3),
    "yearly": relativedelta(years=1),
}


def normalize_frequency(frequency) -> str:
    return (frequency or "").strip().lower()


def first_index_on_or_after(anchor: date, step: relativedelta, target: date) -> int:
    """Smallest k >= 0 with anchor + k*step >= target."""
    if target <= anchor:
        return 0

    if step.days:
        span = (target - anchor).days
        return -(-span // step.days)

    months_per_step = step.years * 12 + step.months
    months_between = (target.year - anchor.year) * 12 + (target.month - anchor.month)
    # month-end clipping can land a step short, so start one early and walk forward
    k = max(months_between // months_per_step - 1, 0)
    while anchor + step * k < target:
        k += 1
    return k


def project_occurrences(anchor, frequency, window_start, window_end,
                        max_iterations=MAX_ITERATIONS):
    """
    Return the ordered dates >= anchor on which a recurrence falls inside
    [window_start, window_end] (both inclusive).

    The k-th candidate is ``anchor + k * step`` rather than the previous
    candidate plus one step, so month/year stepping keeps the anchor's
    day-of-month and only clips it in shorter months (Jan 31 -> Feb 28 -> Mar 31).

    Iteration stops once a candidate passes ``window_end`` or after
    ``max_iterations`` advances. An unknown frequency stops immediately and
    returns what was collected so far (at most the anchor itself).
    """
    anchor = parse_date(anchor)
    window_start = parse_date(window_start)
    window_end = parse_date(window_end)

    occurrences = []
    if window_end < window_start or window_end < anchor:
        return occurrences

    step = FREQUENCY_STEPS.get(normalize_frequency(frequency))
    if step is None:
        if window_start <= anchor <= window_end:
            occurrences.append(anchor)
        return occurrences

    k = first_index_on_or_after(anchor, step, window_start)
    for _ in range(max_iterations):
        current = anchor + step * k
        if current > window_end:
            break
        if current >= window_start and (not occurrences or current > occurrences[-1]):
            occurrences.append(current)
        k += 1

    return occurrences


def next_occurrence(anchor, frequency, after):
    """First occurrence strictly after ``after``; None for unknown frequencies."""
    anchor = parse_date(anchor)
    after = parse_date(after)

    step = FREQUENCY_STEPS.get(normalize_frequency(frequency))
    if step is None:
        return None
    if anchor > after:
        return anchor

    k = first_index_on_or_after(anchor, step, after + timedelta(days=1))
    return anchor + step * k


def cadence_anchor(recurring: dict) -> date:
    """
    Date the stored row steps from.

    ``next_due_date`` advances as occurrences are processed, and stepping from
    an advanced date loses a clipped day-of-month (Jan 31 -> Apr 30 -> May 30).
    While ``next_due_date`` still lies on the ``start_date`` cadence the start
    date is used instead; a manually moved due date becomes its own anchor.
    """
    due = parse_date(recurring["next_due_date"])
    start = recurring.get("start_date")
    if start is None:
        return due

    start = parse_date(start)
    if start >= due:
        return due
    if next_occurrence(start, recurring["frequency"], due - timedelta(days=1)) == due:
        return start
    return due


def occurrences_for(recurring: dict, window_start, window_end,
                    max_iterations=MAX_ITERATIONS):
    """
    Project a stored recurring transaction (a row dict) into a window.

    Honors ``is_active``, never returns dates before ``next_due_date`` and
    clips the window to the row's ``end_date``.
    """
    if not recurring.get("is_active", True):
        return []

    window_start = max(parse_date(window_start), parse_date(recurring["next_due_date"]))
    window_end = parse_date(window_end)
    end_date = recurring.get("end_date")
    if end_date is not None:
        window_end = min(window_end, parse_date(end_date))

    return project_occurrences(
        cadence_anchor(recurring),
        recurring["frequency"],
        window_start,
        window_end,
        max_iterations=max_iterations,
    )


def monthly_equivalent(amount, frequency):
    """Approximate cost per month of a recurrence, for the subscriptions summary."""
    per_year = {
        "daily": 365,
        "weekly": 52,
        "biweekly": 26,
        "monthly": 12,
        "quarterly": 4,
        "yearly": 1,
    }.get(normalize_frequency(frequency))
    if per_year is None:
        return 0.0
    return abs(float(amount)) * per_year / 12
