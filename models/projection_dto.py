from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class DailyProjection:
    date: date
    projected_balance: float


@dataclass
class ProjectedOccurrence:
    recurring_id: int
    name: str
    date: date
    amount: float  # signed


@dataclass
class ProjectionResult:
    start_date: date
    end_date: date
    starting_balance: float
    future_transactions_total: float
    recurring_total: float
    projected_balance: float
    timeline: List[DailyProjection] = field(default_factory=list)
    occurrences: List[ProjectedOccurrence] = field(default_factory=list)
    account_id: Optional[int] = None

    def to_dict(self):
        """JSON-serializable view (ISO dates)."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "account_id": self.account_id,
            "starting_balance": self.starting_balance,
            "future_transactions_total": self.future_transactions_total,
            "recurring_total": self.recurring_total,
            "projected_balance": self.projected_balance,
            "timeline": [
                {"date": day.date.isoformat(), "projected_balance": day.projected_balance}
                for day in self.timeline
            ],
            "occurrences": [
                {
                    "recurring_id": occ.recurring_id,
                    "name": occ.name,
                    "date": occ.date.isoformat(),
                    "amount": occ.amount,
                }
                for occ in self.occurrences
            ],
        }
