"""
Tests for the statistical primitives.
"""

import math

import pytest

from finsight.utils import statistical_tests as stats
from finsight.utils.exceptions import StatisticalInputError


@pytest.mark.unit
class TestDescriptiveStatistics:
    """Test mean, variance and friends."""

    def test_mean(self):
        assert stats.mean([1, 2, 3, 4]) == 2.5
        assert stats.mean([]) == 0.0

    def test_population_variance_and_std(self):
        values = [2, 4, 4, 4, 5, 5, 7, 9]

        assert stats.variance(values) == pytest.approx(4.0)
        assert stats.standard_deviation(values) == pytest.approx(2.0)

    def test_variance_of_empty_series(self):
        assert stats.variance([]) == 0.0
        assert stats.standard_deviation([]) == 0.0

    def test_median_and_percentile(self):
        assert stats.median([3, 1, 2]) == 2.0
        assert stats.median([]) == 0.0
        assert stats.percentile([1, 2, 3, 4, 5], 50) == 3.0
        assert stats.percentile([1, 2, 3, 4, 5], 100) == 5.0

    def test_percentile_out_of_range(self):
        assert stats.percentile([1, 2, 3], -1) == 0.0
        assert stats.percentile([1, 2, 3], 101) == 0.0


@pytest.mark.unit
class TestPairedStatistics:
    """Test covariance, correlation and regression."""

    def test_covariance(self):
        assert stats.covariance([1, 2, 3], [2, 4, 6]) == pytest.approx(4 / 3)

    def test_correlation_perfect(self):
        assert stats.correlation([1, 2, 3, 4], [10, 20, 30, 40]) == pytest.approx(1.0)
        assert stats.correlation([1, 2, 3, 4], [40, 30, 20, 10]) == pytest.approx(-1.0)

    def test_correlation_with_constant_side(self):
        assert stats.correlation([1, 2, 3], [5, 5, 5]) == 0.0

    @pytest.mark.parametrize("operation", [
        stats.covariance,
        stats.correlation,
        stats.r_squared,
        stats.mae,
        stats.rmse,
        stats.mape,
    ])
    def test_mismatched_lengths_raise(self, operation):
        with pytest.raises(StatisticalInputError) as exc_info:
            operation([1, 2, 3], [1, 2])

        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.code == "STATISTICAL_INPUT_ERROR"

    def test_linear_regression(self):
        line = stats.linear_regression([0, 1, 2], [1, 3, 5])

        assert line.slope == pytest.approx(2.0)
        assert line.intercept == pytest.approx(1.0)

    def test_linear_regression_degenerate_input(self):
        assert stats.linear_regression([1, 2], [1]) == (0.0, 0.0)
        assert stats.linear_regression([], []) == (0.0, 0.0)

    def test_linear_regression_constant_x(self):
        line = stats.linear_regression([2, 2, 2], [1, 2, 3])

        assert line.slope == 0.0
        assert line.intercept == pytest.approx(2.0)


@pytest.mark.unit
class TestConfidenceInterval:
    """Test confidence interval estimation."""

    def test_interval_around_mean(self):
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        interval = stats.confidence_interval(values, 0.95)
        margin = 1.96 * 2.0 / math.sqrt(8)

        assert interval.mean == pytest.approx(5.0)
        assert interval.lower == pytest.approx(5.0 - margin)
        assert interval.upper == pytest.approx(5.0 + margin)
        assert interval.width == pytest.approx(2 * margin)

    def test_wider_level_gives_wider_interval(self):
        values = [10, 12, 9, 15, 11]

        assert stats.confidence_interval(values, 0.99).width > stats.confidence_interval(values, 0.90).width

    def test_unknown_level_falls_back_to_95(self):
        assert stats.z_score_for(0.5) == 1.96
        assert stats.z_score_for(0.99) == 2.576

    def test_empty_input(self):
        interval = stats.confidence_interval([])

        assert interval == (0.0, 0.0, 0.0)


@pytest.mark.unit
class TestErrorMetrics:
    """Test fit quality metrics."""

    def test_r_squared_perfect_fit(self):
        assert stats.r_squared([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)

    def test_r_squared_constant_actuals(self):
        assert stats.r_squared([4, 4, 4], [1, 2, 3]) == 0.0

    def test_mae_and_rmse(self):
        assert stats.mae([1, 2, 3], [2, 2, 2]) == pytest.approx(2 / 3)
        assert stats.rmse([0, 0], [3, 4]) == pytest.approx(math.sqrt(12.5))

    def test_mape_ignores_zero_actuals(self):
        assert stats.mape([0, 100], [5, 110]) == pytest.approx(10.0)
        assert stats.mape([0, 0], [1, 2]) == 0.0


@pytest.mark.unit
class TestSeriesTransforms:
    """Test autocorrelation and smoothing."""

    def test_autocorrelation_lag_out_of_range(self):
        assert stats.autocorrelation([1, 2, 3], 0) == 0.0
        assert stats.autocorrelation([1, 2, 3], 3) == 0.0

    def test_autocorrelation_of_constant_series(self):
        assert stats.autocorrelation([5, 5, 5, 5], 1) == 0.0

    def test_autocorrelation_of_periodic_series(self):
        values = [1, 2, 3, 4] * 6

        assert stats.autocorrelation(values, 4) > 0.8
        assert stats.autocorrelation(values, 2) < 0

    def test_centred_moving_average(self):
        result = stats.moving_average([1, 2, 3, 4, 5], 3)

        assert result == pytest.approx([1.5, 2.0, 3.0, 4.0, 4.5])

    def test_moving_average_invalid_window_returns_copy(self):
        assert stats.moving_average([1, 2, 3], 0) == [1.0, 2.0, 3.0]
        assert stats.moving_average([1, 2, 3], 5) == [1.0, 2.0, 3.0]

    def test_exponential_smoothing(self):
        assert stats.exponential_smoothing([10, 20, 20], 0.5) == pytest.approx([10.0, 15.0, 17.5])
        assert stats.exponential_smoothing([]) == []

    def test_exponential_smoothing_invalid_alpha_uses_default(self):
        assert stats.exponential_smoothing([10, 20], 2.0) == pytest.approx([10.0, 13.0])
