"""
Trend, seasonality, change-point and decomposition analysis over a value
series. All methods are stateless and operate on plain float sequences.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from . import statistical_tests as stats
from .constants import (
    CHANGE_POINT_MIN_POINTS,
    CHANGE_POINT_MIN_WINDOW,
    CHANGE_POINT_THRESHOLD,
    DEFAULT_SMOOTHING_ALPHA,
    SEASONALITY_THRESHOLD,
    TREND_CORRELATION_THRESHOLD,
    TREND_SLOPE_THRESHOLD,
)
from .data_preprocessor import DataPreprocessor
from .exceptions import InsufficientDataError, ValidationError


class TrendDirection(str, Enum):
    """Direction of a series over time."""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass
class TrendResult:
    """Linear trend summary."""
    direction: TrendDirection
    slope: float
    strength: float


@dataclass
class SeasonalityResult:
    """Best seasonal period found by autocorrelation scanning."""
    has_seasonality: bool
    period: int
    strength: float


@dataclass
class Decomposition:
    """Additive decomposition: value = trend + seasonal + residual."""
    trend: List[float] = field(default_factory=list)
    seasonal: List[float] = field(default_factory=list)
    residual: List[float] = field(default_factory=list)


class TrendAnalyzer:
    """Higher-level time-series analysis built on the statistical primitives."""

    @staticmethod
    def detect_trend(values: Sequence[float]) -> TrendResult:
        """
        Classify the direction of a series.

        The slope of the OLS line against the time index is compared to 1% of
        the series mean; strength is |R²| of that line.
        """
        if len(values) < 2:
            return TrendResult(direction=TrendDirection.STABLE, slope=0.0, strength=0.0)

        x = list(range(len(values)))
        line = stats.linear_regression(x, values)
        fitted = [line.slope * xi + line.intercept for xi in x]
        strength = abs(stats.r_squared(values, fitted))

        threshold = abs(stats.mean(values)) * TREND_SLOPE_THRESHOLD
        if line.slope > threshold:
            direction = TrendDirection.INCREASING
        elif line.slope < -threshold:
            direction = TrendDirection.DECREASING
        else:
            direction = TrendDirection.STABLE

        return TrendResult(direction=direction, slope=line.slope, strength=strength)

    @staticmethod
    def classify_by_correlation(values: Sequence[float]) -> TrendDirection:
        """Quick direction check from the correlation with the time index."""
        if len(values) < 2:
            return TrendDirection.STABLE

        r = stats.correlation(list(range(len(values))), values)
        if r > TREND_CORRELATION_THRESHOLD:
            return TrendDirection.INCREASING
        if r < -TREND_CORRELATION_THRESHOLD:
            return TrendDirection.DECREASING
        return TrendDirection.STABLE

    @staticmethod
    def calculate_growth_rate(values: Sequence[float]) -> float:
        """Percentage change from the first to the last value."""
        if len(values) < 2 or values[0] == 0:
            return 0.0
        return (values[-1] - values[0]) / values[0] * 100

    @staticmethod
    def detect_seasonality(values: Sequence[float], max_period: int = 12) -> SeasonalityResult:
        """
        Scan lags 2..max_period and keep the one with the highest autocorrelation.

        Lags are capped at half the series length, so a short series may scan
        fewer candidates than ``max_period`` asks for.
        """
        upper = min(max_period, len(values) // 2)

        best_period = 0
        best_strength = 0.0
        for period in range(2, upper + 1):
            strength = stats.autocorrelation(values, period)
            if strength > best_strength:
                best_period = period
                best_strength = strength

        return SeasonalityResult(
            has_seasonality=best_strength > SEASONALITY_THRESHOLD,
            period=best_period,
            strength=best_strength
        )

    @staticmethod
    def find_change_points(values: Sequence[float]) -> List[int]:
        """
        Indices where the mean shifts by more than two pooled standard
        deviations between the window before and the window starting there.
        """
        n = len(values)
        if n < CHANGE_POINT_MIN_POINTS:
            return []

        window = max(CHANGE_POINT_MIN_WINDOW, n // 10)
        change_points = []

        for i in range(window, n - window + 1):
            before = values[i - window:i]
            after = values[i:i + window]

            shift = abs(stats.mean(after) - stats.mean(before))
            pooled = math.sqrt((stats.variance(before) + stats.variance(after)) / 2)

            if pooled == 0:
                if shift > 0:
                    change_points.append(i)
            elif shift / pooled > CHANGE_POINT_THRESHOLD:
                change_points.append(i)

        return change_points

    @staticmethod
    def decompose_time_series(values: Sequence[float], period: int) -> Decomposition:
        """Split a series into moving-average trend, seasonal and residual parts."""
        if period < 2:
            raise ValidationError(
                message="Seasonal period must be at least 2",
                details=[f"Period: {period}"]
            )
        if len(values) < period * 2:
            raise InsufficientDataError(
                message="Not enough data to decompose the series",
                required=period * 2,
                available=len(values)
            )

        trend = stats.moving_average(values, period)
        detrended = [value - t for value, t in zip(values, trend)]

        position_means = [stats.mean(detrended[offset::period]) for offset in range(period)]
        centre = stats.mean(position_means)
        pattern = [m - centre for m in position_means]

        seasonal = [pattern[i % period] for i in range(len(values))]
        residual = [value - t - s for value, t, s in zip(values, trend, seasonal)]

        return Decomposition(trend=trend, seasonal=seasonal, residual=residual)

    @staticmethod
    def identify_outlier_periods(values: Sequence[float]) -> List[int]:
        """Indices of IQR outliers in the raw values."""
        return DataPreprocessor.detect_outliers(values)

    @staticmethod
    def smooth_series(values: Sequence[float], alpha: float = DEFAULT_SMOOTHING_ALPHA) -> List[float]:
        """Exponentially smoothed copy of the series."""
        return stats.exponential_smoothing(values, alpha)
