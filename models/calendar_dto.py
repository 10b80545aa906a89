from dataclasses import dataclass, field
from datetime import date
from typing import List


@dataclass
class CalendarDay:
    date: date
    is_current_month: bool
    is_today: bool
    transactions: List[dict] = field(default_factory=list)
    recurring: List[dict] = field(default_factory=list)

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "is_current_month": self.is_current_month,
            "is_today": self.is_today,
            "transactions": self.transactions,
            "recurring": self.recurring,
        }


@dataclass
class MonthCalendar:
    year: int
    month: int
    days: List[CalendarDay]

    def to_dict(self):
        return {
            "year": self.year,
            "month": self.month,
            "days": [day.to_dict() for day in self.days],
        }
