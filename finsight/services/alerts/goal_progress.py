"""
Goal progress alerts for active savings goals.
"""
import math
from datetime import datetime
from typing import Any, Callable, Dict

from ...models.alerts import AlertSeverity, AlertType
from ...models.financial import Goal
from ...repositories.interfaces import AlertRepository, GoalRepository
from ...utils.constants import BEHIND_SCHEDULE_RATIO, GOAL_WARNING_DAYS, NEAR_COMPLETION_PERCENT
from .base import AlertChecker

SECONDS_PER_DAY = 24 * 60 * 60


def _ceil_days(start: datetime, end: datetime) -> int:
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


class GoalProgressAlertChecker(AlertChecker):
    """
    Evaluates every active goal and raises at most one alert per goal.

    Priority: expired, then behind schedule, then near completion.
    """

    alert_type = AlertType.GOAL_PROGRESS
    name = "Goal Progress Alert Checker"

    def __init__(
        self,
        goal_repo: GoalRepository,
        alert_repo: AlertRepository,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        super().__init__(alert_repo, clock)
        self.goal_repo = goal_repo

    async def check(self, user_id: str) -> None:
        goals = await self.goal_repo.find_active_by_user(user_id)
        for goal in goals:
            await self._evaluate_goal(user_id, goal)

    async def _evaluate_goal(self, user_id: str, goal: Goal) -> None:
        evaluation = self.calculate_progress(goal, self.now())
        related_data = {"goal_id": goal.id, "goal_name": goal.name, **evaluation}
        progress = evaluation["progress"]

        if evaluation["is_expired"]:
            await self.create_alert(
                user_id,
                AlertSeverity.CRITICAL,
                (
                    f'The goal "{goal.name}" has expired. Progress: {progress:.1f}% '
                    f"(${goal.current_amount:.2f} of ${goal.target_amount:.2f})"
                ),
                related_data
            )
        elif evaluation["is_behind_schedule"]:
            days_left = evaluation["days_until_target"]
            await self.create_alert(
                user_id,
                AlertSeverity.WARNING if days_left < GOAL_WARNING_DAYS else AlertSeverity.INFO,
                (
                    f'The goal "{goal.name}" is behind schedule. Current progress: {progress:.1f}%, '
                    f"expected progress: {evaluation['expected_progress']:.1f}%. "
                    f"{days_left} days remaining."
                ),
                related_data
            )
        elif evaluation["is_near_completion"]:
            await self.create_alert(
                user_id,
                AlertSeverity.INFO,
                (
                    f'Almost there! The goal "{goal.name}" is at {progress:.1f}%. '
                    f"Only ${evaluation['amount_needed']:.2f} to go"
                ),
                related_data
            )

    @staticmethod
    def calculate_progress(goal: Goal, now: datetime) -> Dict[str, Any]:
        """Actual against time-proportional expected progress, in percent."""
        progress = goal.current_amount / goal.target_amount * 100
        days_until_target = _ceil_days(now, goal.target_date)
        days_elapsed = _ceil_days(goal.created_at, now)
        total_days = _ceil_days(goal.created_at, goal.target_date)
        expected_progress = days_elapsed / total_days * 100 if total_days > 0 else 100.0

        return {
            "progress": progress,
            "expected_progress": expected_progress,
            "days_until_target": days_until_target,
            "days_elapsed": days_elapsed,
            "is_expired": days_until_target <= 0 and progress < 100,
            "is_behind_schedule": (
                progress < expected_progress * BEHIND_SCHEDULE_RATIO and days_until_target > 0
            ),
            "is_near_completion": NEAR_COMPLETION_PERCENT <= progress < 100,
            "amount_needed": goal.target_amount - goal.current_amount,
        }
