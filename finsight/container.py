"""
Composition root.
Wires repositories, the prediction cache and the alert checkers together.
"""
from typing import Optional

from .config import Settings, get_settings
from .repositories.interfaces import (
    AlertRepository,
    CategoryRepository,
    GoalRepository,
    PredictionRepository,
    TransactionRepository,
)
from .services.alerts import (
    AlertOrchestrator,
    GoalProgressAlertChecker,
    OverspendingAlertChecker,
    RecommendationAlertChecker,
    UnusualPatternAlertChecker,
)
from .services.caching import PredictionCache
from .services.prediction_engine import PredictionEngine


def create_prediction_cache(settings: Optional[Settings] = None) -> PredictionCache:
    """Build the prediction cache from configuration."""
    settings = settings or get_settings()
    return PredictionCache(
        default_ttl=settings.prediction_cache_ttl_seconds,
        max_entries=settings.prediction_cache_max_entries
    )


def build_prediction_engine(
    transaction_repo: TransactionRepository,
    prediction_repo: PredictionRepository,
    cache: Optional[PredictionCache] = None,
    settings: Optional[Settings] = None
) -> PredictionEngine:
    settings = settings or get_settings()
    return PredictionEngine(
        transaction_repo=transaction_repo,
        prediction_repo=prediction_repo,
        cache=cache or create_prediction_cache(settings),
        settings=settings
    )


def build_alert_orchestrator(
    transaction_repo: TransactionRepository,
    goal_repo: GoalRepository,
    category_repo: CategoryRepository,
    alert_repo: AlertRepository
) -> AlertOrchestrator:
    """Register the four alert checkers."""
    return AlertOrchestrator([
        OverspendingAlertChecker(transaction_repo, category_repo, alert_repo),
        GoalProgressAlertChecker(goal_repo, alert_repo),
        UnusualPatternAlertChecker(transaction_repo, alert_repo),
        RecommendationAlertChecker(transaction_repo, category_repo, alert_repo),
    ])
