"""
Preprocessing of raw dated observations into a uniform time series.
"""

import math
from datetime import datetime, timedelta
from numbers import Real
from typing import List, Sequence, Tuple, Union

import pandas as pd

from ..models.forecasting import DataPoint, TimeSeriesData
from .constants import IQR_FENCE_MULTIPLIER, MIN_POINTS_FOR_OUTLIERS, AggregationPeriod
from .exceptions import ValidationError


class DataPreprocessor:
    """Cleans, aggregates and reshapes dated observations."""

    @staticmethod
    def is_valid_point(point: DataPoint) -> bool:
        """A point is valid with a real date and a finite, non-negative value."""
        if not isinstance(point.date, datetime) or pd.isna(point.date):
            return False

        value = point.value
        if isinstance(value, bool) or not isinstance(value, Real):
            return False

        return math.isfinite(value) and value >= 0

    @staticmethod
    def clean_data(points: Sequence[DataPoint]) -> List[DataPoint]:
        """Drop points with invalid dates, non-finite or negative values."""
        return [point for point in points if DataPreprocessor.is_valid_point(point)]

    @staticmethod
    def detect_outliers(values: Sequence[float]) -> List[int]:
        """Indices of values outside the 1.5 * IQR fences."""
        if len(values) < MIN_POINTS_FOR_OUTLIERS:
            return []

        ordered = sorted(values)
        q1 = ordered[int(len(ordered) * 0.25)]
        q3 = ordered[int(len(ordered) * 0.75)]
        iqr = q3 - q1

        lower_fence = q1 - IQR_FENCE_MULTIPLIER * iqr
        upper_fence = q3 + IQR_FENCE_MULTIPLIER * iqr

        return [
            index for index, value in enumerate(values)
            if value < lower_fence or value > upper_fence
        ]

    @staticmethod
    def remove_outliers(points: Sequence[DataPoint]) -> List[DataPoint]:
        """Drop points flagged by ``detect_outliers``."""
        outliers = set(DataPreprocessor.detect_outliers([point.value for point in points]))
        return [point for index, point in enumerate(points) if index not in outliers]

    @staticmethod
    def aggregate_by_period(
        points: Sequence[DataPoint],
        period: Union[AggregationPeriod, str]
    ) -> List[DataPoint]:
        """
        Average the points that fall in the same calendar bucket.

        Buckets are calendar days, ISO-8601 weeks or calendar months. Each
        bucket is represented by midnight of its day, the Monday starting the
        ISO week, or the first day of the month.
        """
        try:
            period = AggregationPeriod(period)
        except ValueError:
            raise ValidationError(
                message="Unsupported aggregation period",
                details=[f"Period: {period}"]
            )

        if not points:
            return []

        df = pd.DataFrame({
            "date": pd.to_datetime([point.date for point in points]),
            "value": [float(point.value) for point in points],
        })
        days = df["date"].dt.normalize()

        if period == AggregationPeriod.DAY:
            bucket = days
        elif period == AggregationPeriod.WEEK:
            bucket = days - pd.to_timedelta(df["date"].dt.weekday, unit="D")
        else:
            bucket = df["date"].dt.to_period("M").dt.to_timestamp()

        grouped = df.groupby(bucket)["value"].mean().sort_index()

        return [
            DataPoint(date=timestamp.to_pydatetime(), value=float(value))
            for timestamp, value in grouped.items()
        ]

    @staticmethod
    def fill_missing_dates(points: Sequence[DataPoint]) -> List[DataPoint]:
        """Insert one point per missing day, valued at the mean of its neighbours."""
        if not points:
            return []

        ordered = sorted(points, key=lambda point: point.date)
        result: List[DataPoint] = []

        for current, following in zip(ordered, ordered[1:]):
            result.append(current)

            days_gap = (following.date - current.date).days
            if days_gap > 1:
                interpolated = (current.value + following.value) / 2
                for offset in range(1, days_gap):
                    result.append(DataPoint(
                        date=current.date + timedelta(days=offset),
                        value=interpolated
                    ))

        result.append(ordered[-1])
        return result

    @staticmethod
    def to_time_series(points: Sequence[DataPoint]) -> TimeSeriesData:
        """Sort ascending and split into parallel dates and values."""
        ordered = sorted(points, key=lambda point: point.date)
        return TimeSeriesData(
            dates=[point.date for point in ordered],
            values=[float(point.value) for point in ordered]
        )

    @staticmethod
    def normalize_data(values: Sequence[float]) -> Tuple[List[float], float, float]:
        """Min-max scale to [0, 1]; constant input maps to 0.5."""
        if len(values) == 0:
            return [], 0.0, 0.0

        minimum = float(min(values))
        maximum = float(max(values))
        value_range = maximum - minimum

        if value_range == 0:
            return [0.5 for _ in values], minimum, maximum

        return [(value - minimum) / value_range for value in values], minimum, maximum

    @staticmethod
    def denormalize(normalized: Sequence[float], minimum: float, maximum: float) -> List[float]:
        """Invert ``normalize_data``."""
        value_range = maximum - minimum
        return [value * value_range + minimum for value in normalized]

    @staticmethod
    def validate_minimum_data(points: Sequence[DataPoint], min_points: int = 30) -> bool:
        """Check that enough points are available for modelling."""
        return len(points) >= min_points
