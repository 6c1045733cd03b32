"""
Persistence boundaries used by the forecasting and alerting core.
Storage backends live outside this package and implement these classes.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models.alerts import Alert
from ..models.financial import Category, Goal, Transaction
from ..models.predictions import PredictionDocument


class TransactionRepository(ABC):
    """Read access to a user's transactions."""

    @abstractmethod
    async def find_by_date_range(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> List[Transaction]:
        """Transactions dated within [start, end]."""

    @abstractmethod
    async def find_all(self, user_id: str) -> List[Transaction]:
        """All transactions of the user in ascending date order."""


class GoalRepository(ABC):
    """Read access to savings goals."""

    @abstractmethod
    async def find_active_by_user(self, user_id: str) -> List[Goal]:
        """Goals of the user that are still active."""


class CategoryRepository(ABC):
    """Read access to categories."""

    @abstractmethod
    async def find_by_id(self, category_id: str) -> Optional[Category]:
        """Category by ID, or None."""


class AlertRepository(ABC):
    """Write access for generated alerts."""

    @abstractmethod
    async def create(self, alert: Alert) -> None:
        """Persist a new alert."""


class PredictionRepository(ABC):
    """Write access for generated predictions."""

    @abstractmethod
    async def save(self, document: PredictionDocument) -> None:
        """Persist a prediction document."""
