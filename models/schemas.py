"""Request payloads accepted by the API routers."""
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

MAX_AMOUNT = 1_000_000_000

TransactionType = Literal["income", "expense"]
RecurringChoice = Literal["no", "daily", "weekly", "biweekly", "monthly", "quarterly", "yearly"]
Frequency = Literal["daily", "weekly", "biweekly", "monthly", "quarterly", "yearly"]
AccountType = Literal["checking", "savings", "credit", "investment", "cash"]


class AccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: AccountType
    currency: str = Field(default="USD", pattern=r"^[A-Z]{3}$")
    opening_balance: float = 0.0

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class AccountUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_active: Optional[bool] = None


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    icon: Optional[str] = None
    color: Optional[str] = None
    parent_id: Optional[int] = None


class TransactionCreate(BaseModel):
    amount: float = Field(gt=0, le=MAX_AMOUNT)
    description: str = Field(min_length=1, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)
    type: TransactionType
    transaction_date: Optional[date] = None
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    recurring: RecurringChoice = "no"
    recurring_end: Optional[date] = None

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if isinstance(value, str) else value


class TransactionUpdate(BaseModel):
    amount: Optional[float] = Field(default=None, gt=0, le=MAX_AMOUNT)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)
    type: Optional[TransactionType] = None
    transaction_date: Optional[date] = None
    account_id: Optional[int] = None
    category_id: Optional[int] = None


class RecurringCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    amount: float = Field(gt=0, le=MAX_AMOUNT)
    type: TransactionType
    frequency: Frequency
    start_date: date
    next_due_date: Optional[date] = None
    end_date: Optional[date] = None
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class RecurringUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    amount: Optional[float] = Field(default=None, gt=0, le=MAX_AMOUNT)
    type: Optional[TransactionType] = None
    frequency: Optional[Frequency] = None
    next_due_date: Optional[date] = None
    end_date: Optional[date] = None
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    is_active: Optional[bool] = None


class BudgetCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    amount: float = Field(gt=0, le=MAX_AMOUNT)
    period: Literal["weekly", "monthly", "yearly"]
    category_id: int
    alert_threshold: int = Field(default=80, ge=50, le=100)
    start_date: Optional[date] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class BudgetUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    amount: Optional[float] = Field(default=None, gt=0, le=MAX_AMOUNT)
    category_id: Optional[int] = None
    alert_threshold: Optional[int] = Field(default=None, ge=50, le=100)
    is_active: Optional[bool] = None


class GoalCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    target_amount: float = Field(gt=0, le=MAX_AMOUNT)
    current_amount: float = Field(default=0.0, ge=0)
    target_date: Optional[date] = None
    monthly_contribution: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=1000)


class GoalContribution(BaseModel):
    amount: float = Field(gt=0, le=MAX_AMOUNT)
    transaction_type: Literal["contribution", "withdrawal"] = "contribution"
    description: Optional[str] = Field(default=None, max_length=500)


class SavingsTransfer(BaseModel):
    amount: float = Field(gt=0, le=MAX_AMOUNT)
    transfer_type: Literal["to_savings", "from_savings"]
    description: Optional[str] = Field(default=None, max_length=500)


class InvestmentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    symbol: Optional[str] = Field(default=None, max_length=20)
    investment_type: str = Field(min_length=1, max_length=50)
    quantity: float = Field(default=1.0, gt=0)
    purchase_price: float = Field(ge=0)
    purchase_date: date
    current_price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class InvestmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    symbol: Optional[str] = Field(default=None, max_length=20)
    quantity: Optional[float] = Field(default=None, gt=0)
    purchase_price: Optional[float] = Field(default=None, ge=0)
    current_price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class ProfileUpdate(BaseModel):
    full_name: str = Field(min_length=1, max_length=100)
    email: EmailStr = Field(max_length=255)
    currency: str = Field(min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")

    @field_validator("full_name", "email", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value
