"""
Persisted prediction document.
"""
from datetime import datetime
from typing import Any, Dict, List

from pydantic import ConfigDict, Field

from .base import UserOwnedModel
from .forecasting import PredictionResult


class PredictionDocument(UserOwnedModel):
    """Forecast run stored for audit and history."""

    model_config = ConfigDict(protected_namespaces=())

    model_type: str = Field(..., description="Model used to produce the forecast")
    series_type: str = Field(default="net", description="Series that was forecast")
    predictions: List[PredictionResult] = Field(..., min_length=1)
    confidence: float = Field(..., ge=0, le=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    expires_at: datetime

    @property
    def total_predicted(self) -> float:
        return sum(point.amount for point in self.predictions)
