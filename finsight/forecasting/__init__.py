"""
Forecasting models.
"""
from .base import PredictionModel
from .linear_regression import LinearRegressionModel, invert_matrix

__all__ = [
    "PredictionModel",
    "LinearRegressionModel",
    "invert_matrix",
]
