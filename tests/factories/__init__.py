"""
Test data factories.
"""
from .financial_factory import (
    CategoryFactory,
    ExpenseTransactionFactory,
    GoalFactory,
    IncomeTransactionFactory,
    TransactionFactory,
)

__all__ = [
    "CategoryFactory",
    "TransactionFactory",
    "ExpenseTransactionFactory",
    "IncomeTransactionFactory",
    "GoalFactory",
]
