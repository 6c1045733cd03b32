"""
Unit tests for UnusualPatternAlertChecker.
"""
from datetime import timedelta

import pytest

from finsight.models import AlertSeverity, AlertType
from finsight.services.alerts import UnusualPatternAlertChecker
from tests.factories import ExpenseTransactionFactory


@pytest.fixture
def checker(transaction_repo, alert_repo, clock):
    return UnusualPatternAlertChecker(transaction_repo, alert_repo, clock=clock)


class TestUnusualPatternAlertChecker:
    """Test high-value and weekday pattern detection."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_high_value_transactions(self, checker, transaction_repo, alert_repo, fixed_now):
        amounts = [50.0] * 9 + [1000.0]
        for day, amount in enumerate(amounts, start=1):
            transaction_repo.add(ExpenseTransactionFactory(
                amount=amount, transaction_date=fixed_now - timedelta(days=day)
            ))

        await checker.check("user_1")

        assert len(alert_repo.alerts) == 1
        alert = alert_repo.alerts[0]
        assert alert.type == AlertType.UNUSUAL_PATTERN
        assert alert.severity == AlertSeverity.INFO
        assert alert.message.startswith("1 transactions with unusually high amounts")
        assert alert.related_data["transaction_count"] == 1
        assert alert.related_data["high_value_transactions"][0]["amount"] == 1000.0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_dominant_weekday(self, checker, transaction_repo, alert_repo, fixed_now):
        same_weekday = [fixed_now - timedelta(days=7 * week) for week in range(5)]
        other_days = [fixed_now - timedelta(days=day) for day in range(1, 6)]
        for date in same_weekday + other_days:
            transaction_repo.add(ExpenseTransactionFactory(amount=40.0, transaction_date=date))

        await checker.check("user_1")

        assert len(alert_repo.alerts) == 1
        alert = alert_repo.alerts[0]
        assert alert.message == "Most of your transactions (5) happen on Saturdays"
        assert alert.related_data["day"] == "Saturday"
        assert alert.related_data["percentage"] == pytest.approx(50.0)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_evenly_spread_activity(self, checker, transaction_repo, alert_repo, fixed_now):
        for day in range(1, 11):
            transaction_repo.add(ExpenseTransactionFactory(
                amount=40.0, transaction_date=fixed_now - timedelta(days=day)
            ))

        await checker.check("user_1")

        assert alert_repo.alerts == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_requires_ten_recent_transactions(self, checker, transaction_repo, alert_repo, fixed_now):
        for week in range(9):
            transaction_repo.add(ExpenseTransactionFactory(
                amount=40.0 if week else 4000.0,
                transaction_date=fixed_now - timedelta(days=3 * week)
            ))
        transaction_repo.add(ExpenseTransactionFactory(
            amount=40.0, transaction_date=fixed_now - timedelta(days=45)
        ))

        await checker.check("user_1")

        assert alert_repo.alerts == []
