"""
Unusual pattern alerts: outsized transactions and a dominant weekday over the
last 30 days.
"""
from collections import Counter
from datetime import datetime
from typing import Callable, List

from ...models.alerts import AlertSeverity, AlertType
from ...models.financial import Transaction
from ...repositories.interfaces import AlertRepository, TransactionRepository
from ...utils import statistical_tests as stats
from ...utils.constants import (
    DAYS_30,
    DOMINANT_WEEKDAY_RATIO,
    MIN_TRANSACTIONS_FOR_PATTERN,
    UNUSUAL_EXPENSE_STD_DEV_MULTIPLIER,
    WEEKDAY_NAMES,
)
from .base import AlertChecker


class UnusualPatternAlertChecker(AlertChecker):
    """Flags high-value transactions and concentrated activity on one weekday."""

    alert_type = AlertType.UNUSUAL_PATTERN
    name = "Unusual Pattern Alert Checker"

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        alert_repo: AlertRepository,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        super().__init__(alert_repo, clock)
        self.transaction_repo = transaction_repo

    async def check(self, user_id: str) -> None:
        transactions = await self.transaction_repo.find_by_date_range(
            user_id, self.days_ago(DAYS_30), self.now()
        )
        if len(transactions) < MIN_TRANSACTIONS_FOR_PATTERN:
            return

        await self._check_high_value_transactions(user_id, transactions)
        await self._check_transaction_timing(user_id, transactions)

    async def _check_high_value_transactions(
        self,
        user_id: str,
        transactions: List[Transaction]
    ) -> None:
        amounts = [t.amount for t in transactions]
        average = stats.mean(amounts)
        threshold = average + UNUSUAL_EXPENSE_STD_DEV_MULTIPLIER * stats.standard_deviation(amounts)

        high_value = [t for t in transactions if t.amount > threshold]
        if not high_value:
            return

        await self.create_alert(
            user_id,
            AlertSeverity.INFO,
            f"{len(high_value)} transactions with unusually high amounts were detected in the last 30 days",
            {
                "transaction_count": len(high_value),
                "average_amount": average,
                "threshold": threshold,
                "high_value_transactions": [
                    {
                        "amount": t.amount,
                        "date": t.transaction_date.isoformat(),
                        "type": t.transaction_type.value,
                    }
                    for t in high_value
                ],
            }
        )

    async def _check_transaction_timing(
        self,
        user_id: str,
        transactions: List[Transaction]
    ) -> None:
        weekday_counts = Counter(t.transaction_date.weekday() for t in transactions)
        weekday, count = weekday_counts.most_common(1)[0]

        if count <= len(transactions) * DOMINANT_WEEKDAY_RATIO:
            return

        day_name = WEEKDAY_NAMES[weekday]
        await self.create_alert(
            user_id,
            AlertSeverity.INFO,
            f"Most of your transactions ({count}) happen on {day_name}s",
            {
                "day": day_name,
                "transaction_count": count,
                "percentage": count / len(transactions) * 100,
            }
        )
