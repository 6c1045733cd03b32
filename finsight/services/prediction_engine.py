"""
Prediction engine.
Runs the forecasting pipeline for a user (preprocessing, model training,
forecast generation, caching and persistence) and derives plain-language
insights from the transaction history.
"""
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd
import structlog

from ..config import Settings, get_settings
from ..forecasting.base import PredictionModel
from ..forecasting.linear_regression import LinearRegressionModel
from ..models.financial import Transaction
from ..models.forecasting import DataPoint, InsightReport, InsightSummary
from ..models.predictions import PredictionDocument
from ..repositories.interfaces import PredictionRepository, TransactionRepository
from ..utils.constants import (
    HIGH_EXPENSE_RATIO,
    LINEAR_REGRESSION_MODEL,
    RECENT_EXPENSE_SKEW_RATIO,
    RECENT_TRANSACTIONS_WINDOW,
    AggregationPeriod,
)
from ..utils.data_preprocessor import DataPreprocessor
from ..utils.exceptions import InsufficientDataError, ValidationError
from .caching import CacheKeyBuilder, PredictionCache

logger = structlog.get_logger()


ModelFactory = Callable[[float], PredictionModel]

MODEL_REGISTRY: Dict[str, ModelFactory] = {
    LINEAR_REGRESSION_MODEL: LinearRegressionModel,
}


class PredictionEngine:
    """Forecasting pipeline for a single user at a time."""

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        prediction_repo: PredictionRepository,
        cache: PredictionCache,
        settings: Optional[Settings] = None
    ):
        self.transaction_repo = transaction_repo
        self.prediction_repo = prediction_repo
        self.cache = cache
        self.settings = settings or get_settings()

    async def predict(
        self,
        user_id: str,
        model_type: str = LINEAR_REGRESSION_MODEL,
        periods: Optional[int] = None
    ) -> PredictionDocument:
        """Forecast the monthly net-flow magnitude for the next ``periods`` months."""
        if periods is None:
            periods = self.settings.default_forecast_periods
        if periods < 1:
            raise ValidationError(
                message="Forecast horizon must be at least one period",
                details=[f"Periods: {periods}"]
            )
        cache_key = CacheKeyBuilder.prediction_key(user_id, model_type, periods)

        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Prediction served from cache", user_id=user_id, key=cache_key)
            return cached

        model = self._create_model(model_type)

        transactions = await self.transaction_repo.find_all(user_id)
        required = self.settings.min_transactions_for_prediction
        if len(transactions) < required:
            raise InsufficientDataError(
                message=f"At least {required} transactions are required to generate predictions",
                required=required,
                available=len(transactions)
            )

        data_points = self.transactions_to_data_points(transactions)
        cleaned = DataPreprocessor.clean_data(data_points)
        aggregated = DataPreprocessor.aggregate_by_period(cleaned, AggregationPeriod.MONTH)
        series = DataPreprocessor.to_time_series(aggregated)

        model.train(series)
        predictions = model.predict(periods)
        metadata = model.get_metadata()

        generated_at = datetime.utcnow()
        ttl_seconds = self.settings.prediction_cache_ttl_seconds
        document = PredictionDocument(
            user_id=user_id,
            model_type=model_type,
            predictions=predictions,
            confidence=model.get_confidence(),
            metadata={
                "name": metadata.name,
                "parameters": metadata.parameters,
                "training_samples": metadata.training_samples,
                "r_squared": metadata.r_squared,
                "mean_absolute_error": metadata.mae,
                "root_mean_squared_error": metadata.rmse,
                "complexity": metadata.complexity,
            },
            generated_at=generated_at,
            expires_at=generated_at + timedelta(seconds=ttl_seconds)
        )

        await self.prediction_repo.save(document)
        await self.cache.set(cache_key, document, ttl=ttl_seconds)

        logger.info(
            "Prediction generated",
            user_id=user_id,
            model_type=model_type,
            periods=periods,
            months_of_history=len(series),
            confidence=round(document.confidence, 4)
        )

        return document

    async def generate_insights(self, user_id: str) -> InsightReport:
        """Summarize income and spending and flag unhealthy patterns."""
        transactions = sorted(
            await self.transaction_repo.find_all(user_id),
            key=lambda t: t.transaction_date
        )

        if len(transactions) < self.settings.min_transactions_for_insights:
            return InsightReport(
                insights=["You need more transactions to generate meaningful insights"],
                summary=InsightSummary(
                    total_transactions=len(transactions),
                    has_enough_data=False
                )
            )

        income = [t.amount for t in transactions if t.is_income]
        expenses = [t.amount for t in transactions if t.is_expense]

        total_income = sum(income)
        total_expense = sum(expenses)
        avg_income = total_income / len(income) if income else 0.0
        avg_expense = total_expense / len(expenses) if expenses else 0.0

        insights = []
        if total_expense > total_income:
            deficit = total_expense - total_income
            insights.append(
                f"Your total expenses (${total_expense:.2f}) exceed your income "
                f"(${total_income:.2f}) by ${deficit:.2f}"
            )
        else:
            surplus = total_income - total_expense
            insights.append(
                f"You have a surplus of ${surplus:.2f}. Good job keeping your spending under control!"
            )

        if avg_expense > avg_income * HIGH_EXPENSE_RATIO:
            insights.append(
                f"Your average expense (${avg_expense:.2f}) is high compared to your average "
                f"income (${avg_income:.2f}). Consider reducing expenses."
            )

        recent = transactions[-RECENT_TRANSACTIONS_WINDOW:]
        recent_expense_ratio = sum(1 for t in recent if t.is_expense) / len(recent)
        if recent_expense_ratio > RECENT_EXPENSE_SKEW_RATIO:
            insights.append(
                "You have had many expenses recently. Consider reviewing your most frequent "
                "spending categories."
            )

        return InsightReport(
            insights=insights,
            summary=InsightSummary(
                total_transactions=len(transactions),
                has_enough_data=True,
                total_income=total_income,
                total_expense=total_expense,
                avg_income=avg_income,
                avg_expense=avg_expense,
                balance=total_income - total_expense
            )
        )

    async def invalidate_cache(self, user_id: str) -> int:
        """Drop every cached prediction of the user. Call on any transaction change."""
        return await self.cache.invalidate_prefix(CacheKeyBuilder.user_prefix(user_id))

    @staticmethod
    def transactions_to_data_points(transactions: Sequence[Transaction]) -> List[DataPoint]:
        """
        Monthly net flow (income positive, expense negative) as absolute
        values dated on the first day of each month.
        """
        if not transactions:
            return []

        df = pd.DataFrame({
            "date": pd.to_datetime([t.transaction_date for t in transactions]),
            "amount": [t.signed_amount for t in transactions],
        })
        monthly = df.groupby(df["date"].dt.to_period("M"))["amount"].sum().sort_index()

        return [
            DataPoint(date=period.to_timestamp().to_pydatetime(), value=abs(float(net)))
            for period, net in monthly.items()
        ]

    def _create_model(self, model_type: str) -> PredictionModel:
        factory = MODEL_REGISTRY.get(model_type)
        if factory is None:
            raise ValidationError(
                message="Unsupported model type",
                details=[f"Model type: {model_type}", f"Available: {sorted(MODEL_REGISTRY)}"]
            )
        return factory(self.settings.forecast_confidence_level)
