"""
Budget recommendations derived from the last 60 days of activity.
"""
from collections import defaultdict
from datetime import datetime
from typing import Callable, Dict, List

from ...models.alerts import AlertSeverity, AlertType
from ...models.financial import Transaction
from ...repositories.interfaces import AlertRepository, CategoryRepository, TransactionRepository
from ...utils.constants import (
    CATEGORY_SPENDING_THRESHOLD,
    DAYS_60,
    MIN_TRANSACTIONS_FOR_RECOMMENDATIONS,
    RECOMMENDED_SAVINGS_RATE,
    SAVINGS_RATE_THRESHOLD,
)
from .base import AlertChecker

MONTHS_IN_WINDOW = 2


class RecommendationAlertChecker(AlertChecker):
    """Savings-rate and category-concentration recommendations."""

    alert_type = AlertType.RECOMMENDATION
    name = "Recommendation Alert Checker"

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
        transactions = await self.transaction_repo.find_by_date_range(
            user_id, self.days_ago(DAYS_60), self.now()
        )
        if len(transactions) < MIN_TRANSACTIONS_FOR_RECOMMENDATIONS:
            return

        expenses = [t for t in transactions if t.is_expense]
        total_income = sum(t.amount for t in transactions if t.is_income)
        total_expense = sum(t.amount for t in expenses)

        await self._check_savings_rate(user_id, total_income, total_expense)
        await self._check_top_spending_category(user_id, total_expense, expenses)

    async def _check_savings_rate(
        self,
        user_id: str,
        total_income: float,
        total_expense: float
    ) -> None:
        if total_income == 0:
            return

        savings_rate = (total_income - total_expense) / total_income * 100
        if savings_rate >= SAVINGS_RATE_THRESHOLD:
            return

        await self.create_alert(
            user_id,
            AlertSeverity.INFO,
            (
                f"Your savings rate is {savings_rate:.1f}%. "
                f"Saving at least {RECOMMENDED_SAVINGS_RATE}% of your income is recommended. "
                "Consider cutting non-essential expenses."
            ),
            {
                "savings_rate": savings_rate,
                "recommended_rate": RECOMMENDED_SAVINGS_RATE,
                "monthly_savings": (total_income - total_expense) / MONTHS_IN_WINDOW,
                "monthly_income": total_income / MONTHS_IN_WINDOW,
            }
        )

    async def _check_top_spending_category(
        self,
        user_id: str,
        total_expense: float,
        expenses: List[Transaction]
    ) -> None:
        totals: Dict[str, float] = defaultdict(float)
        for expense in expenses:
            totals[expense.category_id] += expense.amount

        if not totals or total_expense <= 0:
            return

        category_id = max(totals, key=totals.get)
        amount = totals[category_id]
        percentage = amount / total_expense * 100
        if percentage <= CATEGORY_SPENDING_THRESHOLD:
            return

        category = await self.category_repo.find_by_id(category_id)
        category_name = category.name if category else "Unknown"

        await self.create_alert(
            user_id,
            AlertSeverity.INFO,
            f'{percentage:.1f}% of your spending goes to "{category_name}". '
            "Consider whether you can optimize in this area.",
            {
                "category_id": category_id,
                "category_name": category.name if category else None,
                "amount": amount,
                "percentage": percentage,
            }
        )
