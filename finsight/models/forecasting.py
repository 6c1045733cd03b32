"""
Value objects exchanged between the preprocessing, modelling and
prediction layers.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


@dataclass
class DataPoint:
    """Single dated observation."""
    date: datetime
    value: float


@dataclass
class TimeSeriesData:
    """Parallel date/value sequences in ascending date order."""
    dates: List[datetime] = field(default_factory=list)
    values: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    def __post_init__(self):
        if len(self.dates) != len(self.values):
            raise ValueError("dates and values must have the same length")


@dataclass
class PredictionResult:
    """Forecast for one future period with its uncertainty band."""
    date: datetime
    amount: float
    lower_bound: float
    upper_bound: float

    @property
    def interval_width(self) -> float:
        return self.upper_bound - self.lower_bound


@dataclass(frozen=True)
class ModelMetadata:
    """Snapshot of a training run."""
    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    training_samples: int = 0
    r_squared: float = 0.0
    mae: float = 0.0
    rmse: float = 0.0
    complexity: str = ""


@dataclass
class InsightSummary:
    """Aggregate figures behind a set of insights."""
    total_transactions: int
    has_enough_data: bool
    total_income: float = 0.0
    total_expense: float = 0.0
    avg_income: float = 0.0
    avg_expense: float = 0.0
    balance: float = 0.0


@dataclass
class InsightReport:
    """Human-readable insights plus the summary they were derived from."""
    insights: List[str]
    summary: InsightSummary
