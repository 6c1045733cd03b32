"""
Alert models produced by the alert checkers.
"""
from enum import Enum
from typing import Any, Dict

from pydantic import Field

from .base import UserOwnedModel


class AlertType(str, Enum):
    """Kinds of alerts raised by the checkers."""
    OVERSPENDING = "overspending"
    GOAL_PROGRESS = "goal_progress"
    UNUSUAL_PATTERN = "unusual_pattern"
    RECOMMENDATION = "recommendation"


class AlertSeverity(str, Enum):
    """Alert severities."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class Alert(UserOwnedModel):
    """Alert raised for a user by one of the checkers."""

    type: AlertType
    severity: AlertSeverity
    message: str = Field(..., min_length=10, max_length=1000)
    related_data: Dict[str, Any] = Field(default_factory=dict)
    is_read: bool = Field(default=False)
