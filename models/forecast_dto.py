from dataclasses import dataclass, asdict
from typing import List


@dataclass
class ForecastMonthDTO:
    """Single month in the cash-flow forecast."""
    month: str  # "Mon YYYY"
    projected_income: float
    projected_expenses: float
    projected_balance: float


@dataclass
class CashFlowForecastDTO:
    """Complete multi-month forecast response."""
    current_balance: float
    average_income: float
    average_expenses: float
    months_of_history: int
    months: List[ForecastMonthDTO]

    def to_dict(self):
        return asdict(self)
