"""
Financial domain records read from the persistence collaborators:
Transaction, Category and Goal.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, validator

from .base import UserOwnedModel, new_id, to_naive_utc


class TransactionType(str, Enum):
    """Types of transactions."""
    INCOME = "income"
    EXPENSE = "expense"


class GoalStatus(str, Enum):
    """Lifecycle states of a savings goal."""
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Category(BaseModel):
    """Transaction category, used to enrich alert messages."""

    id: str = Field(default_factory=new_id)
    user_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)


class Transaction(UserOwnedModel):
    """Financial transaction model."""

    amount: float = Field(..., gt=0, description="Absolute amount; the sign comes from the type")
    transaction_type: TransactionType
    transaction_date: datetime
    category_id: str = Field(..., description="Transaction category")
    description: Optional[str] = Field(None, max_length=200)

    @validator("transaction_date")
    def normalize_transaction_date(cls, v):
        return to_naive_utc(v)

    @property
    def is_income(self) -> bool:
        return self.transaction_type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.transaction_type == TransactionType.EXPENSE

    @property
    def signed_amount(self) -> float:
        """Amount with income positive and expense negative."""
        return self.amount if self.is_income else -self.amount


class Goal(UserOwnedModel):
    """Savings goal model."""

    name: str = Field(..., min_length=1, max_length=100)
    target_amount: float = Field(..., gt=0)
    current_amount: float = Field(default=0.0, ge=0)
    target_date: datetime
    status: GoalStatus = Field(default=GoalStatus.ACTIVE)
    description: Optional[str] = Field(None, max_length=500)

    @validator("target_date")
    def validate_target_date(cls, v, values):
        """Validate target date is after creation."""
        v = to_naive_utc(v)
        created_at = values.get("created_at")
        if created_at and v <= created_at:
            raise ValueError("Target date must be after creation date")
        return v

    @property
    def amount_needed(self) -> float:
        return max(0.0, self.target_amount - self.current_amount)
