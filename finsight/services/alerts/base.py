"""
Base class for the rule-based alert checkers.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

import structlog

from ...models.alerts import Alert, AlertSeverity, AlertType
from ...models.base import to_naive_utc
from ...repositories.interfaces import AlertRepository

logger = structlog.get_logger()


class AlertChecker(ABC):
    """
    A single alert rule set.

    Subclasses read the data they need through their repositories and write
    one ``Alert`` per rule violation. ``check`` returns nothing.
    """

    alert_type: AlertType
    name: str

    def __init__(
        self,
        alert_repo: AlertRepository,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        self.alert_repo = alert_repo
        self._clock = clock

    @abstractmethod
    async def check(self, user_id: str) -> None:
        """Evaluate the rules for ``user_id`` and persist any alerts."""

    def now(self) -> datetime:
        return to_naive_utc(self._clock())

    def days_ago(self, days: int) -> datetime:
        return self.now() - timedelta(days=days)

    async def create_alert(
        self,
        user_id: str,
        severity: AlertSeverity,
        message: str,
        related_data: Dict[str, Any],
        alert_type: Optional[AlertType] = None
    ) -> Alert:
        """Build and persist an alert. Defaults to the checker's own type."""
        alert = Alert(
            user_id=user_id,
            type=alert_type or self.alert_type,
            severity=severity,
            message=message,
            related_data=related_data
        )
        await self.alert_repo.create(alert)

        logger.debug(
            "Alert created",
            checker=self.name,
            user_id=user_id,
            alert_type=alert.type.value,
            severity=alert.severity.value
        )
        return alert
