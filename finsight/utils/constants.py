"""
Application constants.
"""

from enum import Enum


class AggregationPeriod(str, Enum):
    """Calendar buckets used when aggregating a series."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# Numerical constants
SINGULAR_PIVOT_EPSILON = 1e-10
Z_SCORES = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}
DEFAULT_Z_SCORE = 1.96
DEFAULT_SMOOTHING_ALPHA = 0.3
IQR_FENCE_MULTIPLIER = 1.5
MIN_POINTS_FOR_OUTLIERS = 4

# Trend analysis constants
TREND_SLOPE_THRESHOLD = 0.01  # fraction of the series mean
TREND_CORRELATION_THRESHOLD = 0.3
SEASONALITY_THRESHOLD = 0.3
CHANGE_POINT_THRESHOLD = 2.0
CHANGE_POINT_MIN_POINTS = 10
CHANGE_POINT_MIN_WINDOW = 5

# Forecasting constants
MIN_TRAINING_POINTS = 2
LINEAR_REGRESSION_MODEL = "linear_regression"

# Alert window constants (days)
DAYS_30 = 30
DAYS_60 = 60

# Overspending rules
MIN_EXPENSES_FOR_CHECK = 5
OVERSPENDING_THRESHOLD = 1.2  # 20% increase
CRITICAL_INCREASE_PERCENT = 50
MIN_EXPENSES_PER_CATEGORY = 3
UNUSUAL_EXPENSE_STD_DEV_MULTIPLIER = 2

# Goal progress rules
BEHIND_SCHEDULE_RATIO = 0.7
NEAR_COMPLETION_PERCENT = 90
GOAL_WARNING_DAYS = 30

# Unusual pattern rules
MIN_TRANSACTIONS_FOR_PATTERN = 10
DOMINANT_WEEKDAY_RATIO = 0.3

# Recommendation rules
MIN_TRANSACTIONS_FOR_RECOMMENDATIONS = 20
SAVINGS_RATE_THRESHOLD = 10
RECOMMENDED_SAVINGS_RATE = 20
CATEGORY_SPENDING_THRESHOLD = 40

# Insight rules
HIGH_EXPENSE_RATIO = 0.8
RECENT_TRANSACTIONS_WINDOW = 10
RECENT_EXPENSE_SKEW_RATIO = 0.8

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
