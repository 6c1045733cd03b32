"""
Overspending alerts: compares daily spending over the last 30 days with the
30 days before, and flags categories containing outsized expenses.
"""
from collections import defaultdict
from datetime import datetime
from typing import Any, Callable, Dict, List

import structlog

from ...models.alerts import AlertSeverity, AlertType
from ...models.financial import Transaction
from ...repositories.interfaces import AlertRepository, CategoryRepository, TransactionRepository
from ...utils import statistical_tests as stats
from ...utils.constants import (
    CRITICAL_INCREASE_PERCENT,
    DAYS_30,
    DAYS_60,
    MIN_EXPENSES_FOR_CHECK,
    MIN_EXPENSES_PER_CATEGORY,
    OVERSPENDING_THRESHOLD,
    UNUSUAL_EXPENSE_STD_DEV_MULTIPLIER,
)
from .base import AlertChecker

logger = structlog.get_logger()


class OverspendingAlertChecker(AlertChecker):
    """Detects spending increases and unusual expenses per category."""

    alert_type = AlertType.OVERSPENDING
    name = "Overspending Alert Checker"

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
        alert_repo: AlertRepository,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        super().__init__(alert_repo, clock)
        self.transaction_repo = transaction_repo
        self.category_repo = category_repo

    async def check(self, user_id: str) -> None:
        recent = await self._expenses_between(user_id, self.days_ago(DAYS_30), self.now())
        if len(recent) < MIN_EXPENSES_FOR_CHECK:
            return

        previous = await self._expenses_between(user_id, self.days_ago(DAYS_60), self.days_ago(DAYS_30))
        if len(previous) < MIN_EXPENSES_FOR_CHECK:
            return

        await self._analyze_spending_increase(user_id, recent, previous)
        await self._analyze_category_spending(user_id, recent)

    async def _expenses_between(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> List[Transaction]:
        transactions = await self.transaction_repo.find_by_date_range(user_id, start, end)
        return [t for t in transactions if t.is_expense]

    async def _analyze_spending_increase(
        self,
        user_id: str,
        recent: List[Transaction],
        previous: List[Transaction]
    ) -> None:
        metrics = self.calculate_spending_metrics(recent, previous)
        if not metrics["has_increased"]:
            return

        increase = metrics["increase_percent"]
        severity = (
            AlertSeverity.CRITICAL if increase > CRITICAL_INCREASE_PERCENT
            else AlertSeverity.WARNING
        )
        message = (
            f"Your spending has increased by {increase:.1f}% over the last 30 days. "
            f"Average daily spending: ${metrics['recent_average']:.2f} "
            f"(before: ${metrics['previous_average']:.2f})"
        )

        await self.create_alert(user_id, severity, message, metrics)
        logger.info("Overspending detected", user_id=user_id, increase_percent=round(increase, 1))

    async def _analyze_category_spending(self, user_id: str, expenses: List[Transaction]) -> None:
        amounts_by_category: Dict[str, List[float]] = defaultdict(list)
        for expense in expenses:
            amounts_by_category[expense.category_id].append(expense.amount)

        for category_id, amounts in amounts_by_category.items():
            if len(amounts) < MIN_EXPENSES_PER_CATEGORY:
                continue

            analysis = self.analyze_amounts(amounts)
            if not analysis["has_unusual_expenses"]:
                continue

            category = await self.category_repo.find_by_id(category_id)
            category_name = category.name if category else "Unknown"

            await self.create_alert(
                user_id,
                AlertSeverity.WARNING,
                (
                    f'Unusual expenses detected in category "{category_name}". '
                    f"Some expenses are well above your average of ${analysis['average_amount']:.2f}"
                ),
                {
                    "category_id": category_id,
                    "category_name": category.name if category else None,
                    **analysis,
                },
                alert_type=AlertType.UNUSUAL_PATTERN
            )

    @staticmethod
    def calculate_spending_metrics(
        recent: List[Transaction],
        previous: List[Transaction]
    ) -> Dict[str, Any]:
        """Average daily spending of both windows and the relative increase."""
        recent_average = sum(t.amount for t in recent) / DAYS_30
        previous_average = sum(t.amount for t in previous) / DAYS_30
        increase_percent = (recent_average - previous_average) / previous_average * 100

        return {
            "recent_average": recent_average,
            "previous_average": previous_average,
            "increase_percent": increase_percent,
            "has_increased": recent_average > previous_average * OVERSPENDING_THRESHOLD,
        }

    @staticmethod
    def analyze_amounts(amounts: List[float]) -> Dict[str, Any]:
        """Expenses above mean + 2 standard deviations."""
        average = stats.mean(amounts)
        std_dev = stats.standard_deviation(amounts)
        threshold = average + UNUSUAL_EXPENSE_STD_DEV_MULTIPLIER * std_dev
        unusual = [amount for amount in amounts if amount > threshold]

        return {
            "average_amount": average,
            "standard_deviation": std_dev,
            "threshold": threshold,
            "unusual_expenses": unusual,
            "has_unusual_expenses": bool(unusual),
        }
