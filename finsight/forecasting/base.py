"""
Base class for forecasting models.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models.forecasting import ModelMetadata, PredictionResult, TimeSeriesData


class PredictionModel(ABC):
    """Contract shared by every forecasting model."""

    model_type: str = "base"

    @abstractmethod
    def train(self, data: TimeSeriesData) -> None:
        """Fit the model to a time series."""

    @abstractmethod
    def predict(self, periods: int) -> List[PredictionResult]:
        """Forecast the given number of future periods."""

    @abstractmethod
    def get_confidence(self) -> float:
        """Confidence of the fit in [0, 1]."""

    @abstractmethod
    def get_metadata(self) -> ModelMetadata:
        """Metadata of the last training run."""

    @property
    def is_trained(self) -> bool:
        return False
