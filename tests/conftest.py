"""
Global pytest configuration and fixtures.
"""

import os
from datetime import datetime

import pytest

from finsight.config import Settings
from finsight.repositories import (
    InMemoryAlertRepository,
    InMemoryCategoryRepository,
    InMemoryGoalRepository,
    InMemoryPredictionRepository,
    InMemoryTransactionRepository,
)
from finsight.services.caching import PredictionCache

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings configuration."""
    return Settings(
        app_name="finsight-test",
        version="1.0.0-test",
        debug=True,
        environment="testing",
        log_level="DEBUG",
        prediction_cache_ttl_hours=24,
        prediction_cache_max_entries=100,
        min_transactions_for_prediction=30,
        min_transactions_for_insights=10,
        default_forecast_periods=6,
        forecast_confidence_level=0.95
    )


@pytest.fixture
def fixed_now() -> datetime:
    """Reference "now" used by the alert checkers under test."""
    return FIXED_NOW


@pytest.fixture
def clock(fixed_now):
    """Clock callable returning ``fixed_now``."""
    return lambda: fixed_now


@pytest.fixture
def transaction_repo() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


@pytest.fixture
def goal_repo() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def category_repo() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture
def alert_repo() -> InMemoryAlertRepository:
    return InMemoryAlertRepository()


@pytest.fixture
def prediction_repo() -> InMemoryPredictionRepository:
    return InMemoryPredictionRepository()


@pytest.fixture
def prediction_cache() -> PredictionCache:
    return PredictionCache(default_ttl=3600, max_entries=100)


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests (>1s)")
