"""
Rule-based alert checkers and their orchestrator.
"""
from .base import AlertChecker
from .goal_progress import GoalProgressAlertChecker
from .orchestrator import AlertOrchestrator, CheckerFailure, CheckRunReport
from .overspending import OverspendingAlertChecker
from .recommendation import RecommendationAlertChecker
from .unusual_pattern import UnusualPatternAlertChecker

__all__ = [
    "AlertChecker",
    "OverspendingAlertChecker",
    "GoalProgressAlertChecker",
    "UnusualPatternAlertChecker",
    "RecommendationAlertChecker",
    "AlertOrchestrator",
    "CheckRunReport",
    "CheckerFailure",
]
