"""Resilient execution of remote management API calls.

This module provides the components for fault-tolerant operations:
- Error classification: maps failures to categories and retry strategies
- ResilientExecutor: bounded retry with backoff and enriched final errors
- OperationLog: append-only structured log of every attempt
"""

from siteops.execution.error_classifier import (
    BackoffType,
    ErrorCategory,
    NormalizedError,
    RetryStrategy,
    RETRY_STRATEGIES,
    categorize_error,
    classify_exception,
)
from siteops.execution.operation_log import LogLevel, OperationLog
from siteops.execution.remediation import get_remediation_steps
from siteops.execution.retry_policy import (
    ExecutorConfig,
    OperationHandler,
    ResilientExecutor,
    calculate_delay,
    get_executor,
    reset_executor,
    with_retry,
)

__all__ = [
    # Error classification
    "BackoffType",
    "ErrorCategory",
    "NormalizedError",
    "RetryStrategy",
    "RETRY_STRATEGIES",
    "categorize_error",
    "classify_exception",
    # Logging
    "LogLevel",
    "OperationLog",
    # Remediation
    "get_remediation_steps",
    # Executor
    "ExecutorConfig",
    "OperationHandler",
    "ResilientExecutor",
    "calculate_delay",
    "get_executor",
    "reset_executor",
    "with_retry",
]
