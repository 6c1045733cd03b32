"""
Repository interfaces and in-memory adapters.
"""
from .interfaces import (
    AlertRepository,
    CategoryRepository,
    GoalRepository,
    PredictionRepository,
    TransactionRepository,
)
from .memory import (
    InMemoryAlertRepository,
    InMemoryCategoryRepository,
    InMemoryGoalRepository,
    InMemoryPredictionRepository,
    InMemoryTransactionRepository,
)

__all__ = [
    "TransactionRepository",
    "GoalRepository",
    "CategoryRepository",
    "AlertRepository",
    "PredictionRepository",
    "InMemoryTransactionRepository",
    "InMemoryGoalRepository",
    "InMemoryCategoryRepository",
    "InMemoryAlertRepository",
    "InMemoryPredictionRepository",
]
