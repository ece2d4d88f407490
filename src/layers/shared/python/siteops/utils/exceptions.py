"""Custom exception classes for siteops."""

from collections.abc import Mapping
from typing import Any


class SiteOpsError(Exception):
    """Base exception for siteops operation failures."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        """Initialize SiteOpsError.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            status_code: Status reported by the remote API, if any.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "OPERATION_ERROR"
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert exception to a plain dictionary."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.status_code is not None:
            result["status_code"] = self.status_code
        if self.details:
            result["details"] = self.details
        return result


class EnrichedOperationError(SiteOpsError):
    """Raised when a wrapped operation fails for good.

    Produced once per failed ``execute`` call, after retries are exhausted
    or a non-retryable category is hit. Carries everything needed to
    diagnose the failure without re-running it.
    """

    def __init__(
        self,
        original_error: BaseException,
        operation_name: str,
        category: str,
        context: Mapping[str, Any],
        remediation_steps: tuple[str, ...],
        timestamp: str,
        attempts: int,
        error_name: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize EnrichedOperationError.

        Args:
            original_error: Exception raised by the last attempt.
            operation_name: Descriptive name of the operation.
            category: Error category value of the last attempt's error.
            context: Read-only caller metadata.
            remediation_steps: Ordered advisory steps.
            timestamp: ISO-8601 UTC time the error was built.
            attempts: Number of attempts made.
            error_name: Normalized error name.
            status_code: Normalized HTTP-like status code, if any.
        """
        self.original_error = original_error
        self.operation_name = operation_name
        self.category = category
        self.context = context
        self.remediation_steps = remediation_steps
        self.timestamp = timestamp
        self.attempts = attempts
        self.error_name = error_name
        super().__init__(
            message=str(original_error) or type(original_error).__name__,
            error_code="OPERATION_FAILED",
            status_code=status_code,
            details={
                "operation_name": operation_name,
                "category": category,
                "attempts": attempts,
                "context": dict(context),
                "remediation_steps": list(remediation_steps),
                "timestamp": timestamp,
            },
        )
