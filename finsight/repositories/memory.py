"""
In-memory repository implementations.

Useful for embedding the core without a database and as test doubles.
"""
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..models.alerts import Alert
from ..models.base import to_naive_utc
from ..models.financial import Category, Goal, GoalStatus, Transaction
from ..models.predictions import PredictionDocument
from .interfaces import (
    AlertRepository,
    CategoryRepository,
    GoalRepository,
    PredictionRepository,
    TransactionRepository,
)


class InMemoryTransactionRepository(TransactionRepository):
    """Transactions grouped by user."""

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._by_user: Dict[str, List[Transaction]] = defaultdict(list)
        for transaction in transactions:
            self.add(transaction)

    def add(self, transaction: Transaction) -> None:
        self._by_user[transaction.user_id].append(transaction)

    def remove(self, user_id: str, transaction_id: str) -> bool:
        before = len(self._by_user[user_id])
        self._by_user[user_id] = [t for t in self._by_user[user_id] if t.id != transaction_id]
        return len(self._by_user[user_id]) < before

    async def find_by_date_range(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> List[Transaction]:
        start, end = to_naive_utc(start), to_naive_utc(end)
        return [
            t for t in await self.find_all(user_id)
            if start <= t.transaction_date <= end
        ]

    async def find_all(self, user_id: str) -> List[Transaction]:
        return sorted(self._by_user.get(user_id, []), key=lambda t: t.transaction_date)


class InMemoryGoalRepository(GoalRepository):
    """Goals grouped by user."""

    def __init__(self, goals: Iterable[Goal] = ()):
        self._by_user: Dict[str, List[Goal]] = defaultdict(list)
        for goal in goals:
            self.add(goal)

    def add(self, goal: Goal) -> None:
        self._by_user[goal.user_id].append(goal)

    async def find_active_by_user(self, user_id: str) -> List[Goal]:
        return [g for g in self._by_user.get(user_id, []) if g.status == GoalStatus.ACTIVE]


class InMemoryCategoryRepository(CategoryRepository):
    """Categories by ID."""

    def __init__(self, categories: Iterable[Category] = ()):
        self._by_id: Dict[str, Category] = {}
        for category in categories:
            self.add(category)

    def add(self, category: Category) -> None:
        self._by_id[category.id] = category

    async def find_by_id(self, category_id: str) -> Optional[Category]:
        return self._by_id.get(category_id)


class InMemoryAlertRepository(AlertRepository):
    """Append-only alert store."""

    def __init__(self):
        self.alerts: List[Alert] = []

    async def create(self, alert: Alert) -> None:
        self.alerts.append(alert)

    def list_for_user(self, user_id: str) -> List[Alert]:
        return [alert for alert in self.alerts if alert.user_id == user_id]


class InMemoryPredictionRepository(PredictionRepository):
    """Append-only prediction history."""

    def __init__(self):
        self.documents: List[PredictionDocument] = []

    async def save(self, document: PredictionDocument) -> None:
        self.documents.append(document)

    def list_for_user(self, user_id: str) -> List[PredictionDocument]:
        return [doc for doc in self.documents if doc.user_id == user_id]
