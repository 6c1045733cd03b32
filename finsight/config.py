"""
Configuration module using Pydantic Settings.
Handles environment variables and forecasting/alerting configuration.
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # App settings
    app_name: str = Field(default="finsight", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="production", description="Environment name")

    # Monitoring and logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Prediction cache
    prediction_cache_ttl_hours: int = Field(
        default=24, ge=1, le=168, description="Prediction cache TTL in hours"
    )
    prediction_cache_max_entries: int = Field(
        default=1000, ge=1, description="Maximum number of cached predictions"
    )

    # Forecasting
    min_transactions_for_prediction: int = Field(
        default=30, ge=1, description="Minimum transactions required to forecast"
    )
    min_transactions_for_insights: int = Field(
        default=10, ge=1, description="Minimum transactions required for insights"
    )
    default_forecast_periods: int = Field(
        default=6, ge=1, le=60, description="Default forecast horizon in months"
    )
    forecast_confidence_level: float = Field(
        default=0.95, description="Confidence level used for forecast bands"
    )

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @validator("environment")
    def validate_environment(cls, v):
        """Validate environment."""
        valid_envs = ["development", "testing", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment. Must be one of: {valid_envs}")
        return v.lower()

    @validator("forecast_confidence_level")
    def validate_confidence_level(cls, v):
        """Validate confidence level is one of the tabulated z-score levels."""
        valid_levels = [0.90, 0.95, 0.99]
        if v not in valid_levels:
            raise ValueError(f"Invalid confidence level. Must be one of: {valid_levels}")
        return v

    @property
    def prediction_cache_ttl_seconds(self) -> int:
        """Prediction cache TTL expressed in seconds."""
        return self.prediction_cache_ttl_hours * 3600

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance. Useful for dependency injection."""
    return settings
