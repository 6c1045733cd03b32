"""
Alert orchestration.
Runs the registered checkers for a user and isolates individual failures.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import structlog

from ...models.alerts import AlertType
from ...utils.exceptions import CheckerNotFoundError, ValidationError
from .base import AlertChecker

logger = structlog.get_logger()


@dataclass
class CheckerFailure:
    """A checker that raised during ``run_all_checks``."""
    alert_type: AlertType
    checker_name: str
    error: Exception


@dataclass
class CheckRunReport:
    """Outcome of running every checker for one user."""
    user_id: str
    completed: List[AlertType] = field(default_factory=list)
    failures: List[CheckerFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


class AlertOrchestrator:
    """Registry of alert checkers keyed by alert type."""

    def __init__(self, checkers: Iterable[AlertChecker]):
        self._checkers: Dict[AlertType, AlertChecker] = {}
        for checker in checkers:
            if checker.alert_type in self._checkers:
                raise ValidationError(
                    message="Duplicate alert checker",
                    details=[f"Alert type: {checker.alert_type.value}"]
                )
            self._checkers[checker.alert_type] = checker

    async def run_all_checks(self, user_id: str) -> CheckRunReport:
        """Run every checker concurrently. Failures are logged and reported, never raised."""
        checkers = list(self._checkers.values())
        results = await asyncio.gather(
            *(checker.check(user_id) for checker in checkers),
            return_exceptions=True
        )

        report = CheckRunReport(user_id=user_id)
        for checker, result in zip(checkers, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Alert checker failed",
                    checker=checker.name,
                    alert_type=checker.alert_type.value,
                    user_id=user_id,
                    error=str(result)
                )
                report.failures.append(
                    CheckerFailure(
                        alert_type=checker.alert_type,
                        checker_name=checker.name,
                        error=result
                    )
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                report.completed.append(checker.alert_type)

        logger.info(
            "Alert checks completed",
            user_id=user_id,
            completed=len(report.completed),
            failed=len(report.failures)
        )
        return report

    async def run_specific_check(self, user_id: str, alert_type: AlertType) -> None:
        """Run one checker. Its errors propagate to the caller."""
        checker = self._checkers.get(alert_type)
        if checker is None:
            raise CheckerNotFoundError(getattr(alert_type, "value", alert_type))

        await checker.check(user_id)

    def get_available_types(self) -> List[AlertType]:
        return list(self._checkers)
