"""
Custom exceptions for the forecasting and alerting core.
All business logic and numerical failures are defined here.
"""

from typing import List, Optional


class AppException(Exception):
    """Base exception for all application exceptions."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[List[str]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or []
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[List[str]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details=details
        )


class InsufficientDataError(AppException):
    """Raised when there is not enough data to train or forecast."""

    def __init__(
        self,
        message: str = "Not enough data",
        required: Optional[int] = None,
        available: Optional[int] = None
    ):
        self.required = required
        self.available = available

        details = []
        if required is not None:
            details.append(f"Required: {required}")
        if available is not None:
            details.append(f"Available: {available}")

        super().__init__(
            message=message,
            code="INSUFFICIENT_DATA",
            details=details
        )


class SingularMatrixError(AppException):
    """Raised when a matrix cannot be inverted."""

    def __init__(
        self,
        message: str = "Singular matrix, cannot invert",
        details: Optional[List[str]] = None
    ):
        super().__init__(
            message=message,
            code="SINGULAR_MATRIX",
            details=details
        )


class UntrainedModelError(AppException):
    """Raised when a model is used before it has been trained."""

    def __init__(
        self,
        message: str = "Model must be trained before making predictions",
        model_name: str = "unknown"
    ):
        super().__init__(
            message=message,
            code="UNTRAINED_MODEL",
            details=[f"Model: {model_name}"]
        )


class CheckerNotFoundError(AppException):
    """Raised when no alert checker is registered for a type."""

    def __init__(self, alert_type: str):
        self.alert_type = alert_type
        super().__init__(
            message=f"No checker for type: {alert_type}",
            code="CHECKER_NOT_FOUND",
            details=[f"Alert type: {alert_type}"]
        )


class StatisticalInputError(AppException, ValueError):
    """Raised when paired statistical inputs have mismatched lengths."""

    def __init__(self, operation: str, left_length: int, right_length: int):
        super().__init__(
            message=f"{operation} requires sequences of equal length",
            code="STATISTICAL_INPUT_ERROR",
            details=[f"Lengths: {left_length} != {right_length}"]
        )
