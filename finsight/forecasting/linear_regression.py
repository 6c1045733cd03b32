"""
Quadratic least-squares regression over a time index.

The model fits y = b0 + b1*x + b2*x^2 with x = 0..n-1 by solving the normal
equations, inverting X'X with Gauss-Jordan elimination and partial pivoting.
"""
import math
from typing import List, Optional, Sequence

import pandas as pd
import structlog

from ..models.forecasting import ModelMetadata, PredictionResult, TimeSeriesData
from ..utils import statistical_tests as stats
from ..utils.constants import LINEAR_REGRESSION_MODEL, MIN_TRAINING_POINTS, SINGULAR_PIVOT_EPSILON
from ..utils.exceptions import (
    InsufficientDataError,
    SingularMatrixError,
    UntrainedModelError,
    ValidationError,
)
from .base import PredictionModel

logger = structlog.get_logger()

Matrix = List[List[float]]


def transpose(matrix: Matrix) -> Matrix:
    """Transpose a rectangular matrix."""
    return [list(column) for column in zip(*matrix)]


def multiply_matrices(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product a @ b."""
    if not a or not b or len(a[0]) != len(b):
        raise ValidationError(
            message="Incompatible matrix dimensions",
            details=[f"{len(a)}x{len(a[0]) if a else 0} @ {len(b)}x{len(b[0]) if b else 0}"]
        )

    columns = transpose(b)
    return [
        [sum(x * y for x, y in zip(row, column)) for column in columns]
        for row in a
    ]


def multiply_matrix_vector(a: Matrix, v: Sequence[float]) -> List[float]:
    """Matrix-vector product a @ v."""
    return [sum(x * y for x, y in zip(row, v)) for row in a]


def invert_matrix(matrix: Matrix) -> Matrix:
    """
    Invert a square matrix with Gauss-Jordan elimination.

    At each step the row holding the largest absolute value in the pivot
    column is swapped into the pivot row. A pivot whose magnitude falls below
    ``SINGULAR_PIVOT_EPSILON`` raises ``SingularMatrixError``.
    """
    n = len(matrix)
    if any(len(row) != n for row in matrix):
        raise ValidationError(message="Only square matrices can be inverted")

    augmented = [
        [float(value) for value in row] + [1.0 if i == j else 0.0 for j in range(n)]
        for i, row in enumerate(matrix)
    ]

    for col in range(n):
        pivot_row = max(range(col, n), key=lambda r: abs(augmented[r][col]))
        augmented[col], augmented[pivot_row] = augmented[pivot_row], augmented[col]

        pivot = augmented[col][col]
        if abs(pivot) < SINGULAR_PIVOT_EPSILON:
            raise SingularMatrixError(details=[f"Pivot {pivot!r} at column {col}"])

        augmented[col] = [value / pivot for value in augmented[col]]

        for row in range(n):
            if row != col:
                factor = augmented[row][col]
                if factor != 0:
                    augmented[row] = [
                        value - factor * pivot_value
                        for value, pivot_value in zip(augmented[row], augmented[col])
                    ]

    return [row[n:] for row in augmented]


class LinearRegressionModel(PredictionModel):
    """Quadratic trend model fitted by ordinary least squares."""

    model_type = LINEAR_REGRESSION_MODEL
    name = "Linear Regression"

    def __init__(self, confidence_level: float = 0.95):
        self.confidence_level = confidence_level
        self._intercept = 0.0
        self._coefficients: List[float] = []
        self._values: List[float] = []
        self._last_date = None
        self._metadata: Optional[ModelMetadata] = None

    @property
    def is_trained(self) -> bool:
        return self._metadata is not None

    def train(self, data: TimeSeriesData) -> None:
        """Fit the quadratic to ``data`` and record fit metrics."""
        n = len(data.values)
        if n < MIN_TRAINING_POINTS:
            raise InsufficientDataError(
                message="At least 2 data points are required to train the model",
                required=MIN_TRAINING_POINTS,
                available=n
            )

        x = list(range(n))
        y = [float(value) for value in data.values]

        design = self._design_matrix(x)
        design_t = transpose(design)
        xtx_inverse = invert_matrix(multiply_matrices(design_t, design))
        beta = multiply_matrix_vector(xtx_inverse, multiply_matrix_vector(design_t, y))

        self._intercept = beta[0]
        self._coefficients = beta[1:]
        self._values = y
        self._last_date = data.dates[-1]

        fitted = [self._evaluate(xi) for xi in x]
        self._metadata = ModelMetadata(
            name=self.name,
            parameters={
                "intercept": self._intercept,
                "coefficients": list(self._coefficients),
            },
            training_samples=n,
            r_squared=stats.r_squared(y, fitted),
            mae=stats.mae(y, fitted),
            rmse=stats.rmse(y, fitted),
            complexity="O(n)"
        )

        logger.debug(
            "Regression model trained",
            samples=n,
            r_squared=self._metadata.r_squared,
            rmse=self._metadata.rmse
        )

    def predict(self, periods: int) -> List[PredictionResult]:
        """
        Forecast ``periods`` monthly steps after the last training date.

        The band half-width is the 95% confidence-interval width of the
        training values scaled by sqrt(1 + i/n), so it widens with the step.
        """
        if not self.is_trained:
            raise UntrainedModelError(model_name=self.name)
        if periods < 1:
            raise ValidationError(
                message="Forecast horizon must be at least one period",
                details=[f"Periods: {periods}"]
            )

        n = len(self._values)
        interval_width = stats.confidence_interval(self._values, self.confidence_level).width
        last_date = pd.Timestamp(self._last_date)

        results = []
        for step in range(1, periods + 1):
            amount = max(0.0, self._evaluate(n + step - 1))
            uncertainty = interval_width * math.sqrt(1 + step / n)

            results.append(PredictionResult(
                date=(last_date + pd.DateOffset(months=step)).to_pydatetime(),
                amount=amount,
                lower_bound=max(0.0, amount - uncertainty),
                upper_bound=amount + uncertainty
            ))

        return results

    def get_confidence(self) -> float:
        """R² of the fit clamped to [0, 1]."""
        if not self.is_trained:
            return 0.0
        return max(0.0, min(1.0, self._metadata.r_squared))

    def get_metadata(self) -> ModelMetadata:
        if not self.is_trained:
            raise UntrainedModelError(model_name=self.name)
        return self._metadata

    @staticmethod
    def _design_matrix(x: Sequence[int]) -> Matrix:
        return [[1.0, float(xi), float(xi * xi)] for xi in x]

    def _evaluate(self, x: float) -> float:
        b1, b2 = self._coefficients
        return self._intercept + b1 * x + b2 * x * x
