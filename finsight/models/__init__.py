"""
Models for the finsight forecasting and alerting core.
"""
from .alerts import Alert, AlertSeverity, AlertType
from .base import IdentifiedModel, TimestampedModel, UserOwnedModel
from .financial import Category, Goal, GoalStatus, Transaction, TransactionType
from .forecasting import (
    DataPoint,
    InsightReport,
    InsightSummary,
    ModelMetadata,
    PredictionResult,
    TimeSeriesData,
)
from .predictions import PredictionDocument

__all__ = [
    # Base models
    "TimestampedModel",
    "IdentifiedModel",
    "UserOwnedModel",
    # Financial models
    "Category",
    "Goal",
    "GoalStatus",
    "Transaction",
    "TransactionType",
    # Alert models
    "Alert",
    "AlertSeverity",
    "AlertType",
    # Forecasting value objects
    "DataPoint",
    "TimeSeriesData",
    "PredictionResult",
    "ModelMetadata",
    "InsightReport",
    "InsightSummary",
    # Persisted predictions
    "PredictionDocument",
]
