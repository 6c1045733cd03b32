"""
Unit tests for RecommendationAlertChecker.
"""
from datetime import timedelta

import pytest

from finsight.models import AlertSeverity, AlertType, Category
from finsight.services.alerts import RecommendationAlertChecker
from tests.factories import ExpenseTransactionFactory, IncomeTransactionFactory


@pytest.fixture
def checker(transaction_repo, category_repo, alert_repo, clock):
    return RecommendationAlertChecker(transaction_repo, category_repo, alert_repo, clock=clock)


def add_activity(repo, now, incomes, expenses):
    """Spread incomes and (amount, category_id) expenses over the last 50 days."""
    for day, amount in enumerate(incomes, start=1):
        repo.add(IncomeTransactionFactory(amount=amount, transaction_date=now - timedelta(days=day)))
    for day, (amount, category_id) in enumerate(expenses, start=25):
        repo.add(ExpenseTransactionFactory(
            amount=amount, category_id=category_id, transaction_date=now - timedelta(days=day)
        ))


class TestRecommendationAlertChecker:
    """Test savings rate and category concentration."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_low_savings_rate_and_dominant_category(
        self, checker, transaction_repo, category_repo, alert_repo, fixed_now
    ):
        category_repo.add(Category(id="cat_rent", user_id="user_1", name="Rent"))
        add_activity(transaction_repo, fixed_now, [100.0] * 10, [(95.0, "cat_rent")] * 10)

        await checker.check("user_1")

        assert [a.type for a in alert_repo.alerts] == [AlertType.RECOMMENDATION] * 2
        assert all(a.severity == AlertSeverity.INFO for a in alert_repo.alerts)

        savings, category = alert_repo.alerts
        assert savings.message.startswith("Your savings rate is 5.0%")
        assert savings.related_data["recommended_rate"] == 20
        assert savings.related_data["monthly_income"] == pytest.approx(500.0)
        assert category.message.startswith('100.0% of your spending goes to "Rent"')

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_healthy_budget(self, checker, transaction_repo, alert_repo, fixed_now):
        categories = ["cat_a", "cat_b", "cat_c", "cat_d", "cat_e"] * 2
        add_activity(transaction_repo, fixed_now, [100.0] * 10, [(50.0, c) for c in categories])

        await checker.check("user_1")

        assert alert_repo.alerts == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_income_skips_savings_rate(self, checker, transaction_repo, alert_repo, fixed_now):
        add_activity(transaction_repo, fixed_now, [], [(20.0, "cat_gone")] * 20)

        await checker.check("user_1")

        assert len(alert_repo.alerts) == 1
        assert '"Unknown"' in alert_repo.alerts[0].message
        assert alert_repo.alerts[0].related_data["category_name"] is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_requires_twenty_transactions(self, checker, transaction_repo, alert_repo, fixed_now):
        add_activity(transaction_repo, fixed_now, [100.0] * 9, [(95.0, "cat_rent")] * 10)

        await checker.check("user_1")

        assert alert_repo.alerts == []
