from datetime import date, timedelta

from db import get_db
from repositories.accounts_repository import get_account, get_total_balance
from repositories.recurring_repository import get_all_recurring
from repositories.transactions_repository import sum_amount, daily_totals
from services.errors import NotFoundError
from services.recurrence_service import occurrences_for
from models.projection_dto import DailyProjection, ProjectedOccurrence, ProjectionResult
from utils.dates import month_bounds, parse_date
from utils.money import signed_amount, to_money


def calculate_balance_projection(target_date=None, today=None, account_id=None) -> ProjectionResult:
    """Projected balance at ``target_date`` (default: end of the current month).

    current ledger balance (transactions dated on or before today)
    + known future transactions in (today, target]
    + projected recurring occurrences in (today, target]

    Pure function of ledger state, recurring templates and ``today``.
    No writes, no side effects.
    """
    today = parse_date(today) if today else date.today()
    target_date = parse_date(target_date) if target_date else month_bounds(today)[1]
    if target_date < today:
        raise ValueError("target_date must be on or after today")

    conn = get_db()
    try:
        # --- starting balance ---
        if account_id is None:
            starting_balance = get_total_balance(conn, today)
        else:
            account = get_account(conn, account_id, today)
            if not account:
                raise NotFoundError("Account", account_id)
            starting_balance = account["balance"]

        # the all-accounts balance covers active accounts only; keep future items in the same scope
        all_accounts = account_id is None

        # --- known future transactions ---
        future_total = sum_amount(conn, account_id=account_id, after_date=today, end_date=target_date,
                                  active_accounts_only=all_accounts)
        daily_deltas = {
            day: float(total)
            for day, total in daily_totals(conn, today, target_date, account_id=account_id,
                                           active_accounts_only=all_accounts).items()
        }

        # --- fetch active recurring templates ---
        templates = get_all_recurring(conn, active_only=True, active_accounts_only=all_accounts)
    finally:
        conn.close()

    occurrences = []
    recurring_total = 0.0
    for template in templates:
        if account_id is not None and template["account_id"] != account_id:
            continue
        amount = signed_amount(template["amount"], template["type"])
        for occ in occurrences_for(template, today + timedelta(days=1), target_date):
            occurrences.append(ProjectedOccurrence(
                recurring_id=template["id"], name=template["name"], date=occ, amount=amount,
            ))
            daily_deltas[occ] = daily_deltas.get(occ, 0.0) + amount
            recurring_total += amount
    occurrences.sort(key=lambda o: (o.date, o.recurring_id))

    # --- build timeline ---
    timeline = []
    running = float(starting_balance)
    iter_day = today
    while iter_day <= target_date:
        if iter_day > today:
            running += daily_deltas.get(iter_day, 0.0)
        timeline.append(DailyProjection(date=iter_day, projected_balance=to_money(running)))
        iter_day += timedelta(days=1)

    projected_balance = float(starting_balance) + float(future_total) + recurring_total

    return ProjectionResult(
        start_date=today,
        end_date=target_date,
        account_id=account_id,
        starting_balance=to_money(starting_balance),
        future_transactions_total=to_money(future_total),
        recurring_total=to_money(recurring_total),
        projected_balance=to_money(projected_balance),
        timeline=timeline,
        occurrences=occurrences,
    )
