"""Resilient execution of remote management API calls.

Wraps an operation with:
- Error categorization (authentication, rate limit, network, ...)
- Exponential or linear backoff with jitter for retryable categories
- Structured append-only logging of every attempt
- A remediation-annotated ``EnrichedOperationError`` on final failure

Usage:
    executor = ResilientExecutor()

    result = await executor.execute(
        lambda: cloudfront.get_distribution_config(Id=distribution_id),
        "Get Distribution Configuration",
        {"distribution_id": distribution_id},
    )
"""

import asyncio
import inspect
import math
import random
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from siteops.execution.error_classifier import (
    RETRY_STRATEGIES,
    BackoffType,
    ErrorCategory,
    NormalizedError,
    categorize_error,
    classify_exception,
)
from siteops.execution.operation_log import LogLevel, OperationLog
from siteops.execution.remediation import get_remediation_steps
from siteops.models.log_entry import LogEntry, LogEntryType, utc_now_iso
from siteops.utils.exceptions import EnrichedOperationError

T = TypeVar("T")

DEFAULT_LOG_FILE = "logs/cloudfront-errors.log"
JITTER_FACTOR = 0.1


@dataclass(frozen=True)
class ExecutorConfig:
    """Configuration for the resilient executor. Read-only once built."""

    max_retries: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 30000
    log_level: LogLevel = LogLevel.INFO
    log_file: str | None = DEFAULT_LOG_FILE

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError("max_delay_ms must be >= base_delay_ms")
        object.__setattr__(self, "log_level", LogLevel.parse(self.log_level))


def calculate_delay(
    attempt: int,
    backoff: BackoffType,
    base_delay_ms: int,
    max_delay_ms: int,
    rng: Callable[[float, float], float] | None = None,
) -> int:
    """Calculate the delay before the next attempt.

    Args:
        attempt: Number of the failed attempt (1-indexed).
        backoff: Backoff type of the error's category.
        base_delay_ms: Base delay in milliseconds.
        max_delay_ms: Cap applied before jitter.
        rng: Uniform random source, ``rng(low, high)``. Defaults to
            ``random.uniform``.

    Returns:
        Delay in whole milliseconds, including up to 10% jitter.
    """
    if backoff == BackoffType.EXPONENTIAL:
        delay = min(base_delay_ms * (2 ** (attempt - 1)), max_delay_ms)
    elif backoff == BackoffType.LINEAR:
        delay = min(base_delay_ms * attempt, max_delay_ms)
    else:
        delay = base_delay_ms

    # Jitter desynchronizes concurrent retriers
    jitter = (rng or random.uniform)(0, JITTER_FACTOR * delay)
    return math.floor(delay + jitter)


class ResilientExecutor:
    """Executes operations with categorized retry and enriched failures.

    The executor never builds network clients. Callers hand it a
    zero-argument operation, usually a lambda around a boto3 call, and
    receive either the operation's result or an EnrichedOperationError.

    Example:
        executor = ResilientExecutor(ExecutorConfig(
            max_retries=5,
            base_delay_ms=500,
            log_level=LogLevel.WARN,
        ))

        try:
            config = await executor.execute(fetch_config, "Get Config")
        except EnrichedOperationError as e:
            for step in e.remediation_steps:
                print(step)
    """

    def __init__(
        self,
        config: ExecutorConfig | None = None,
        log: OperationLog | None = None,
    ):
        """Initialize the executor.

        Args:
            config: Executor configuration.
            log: Operation log sink. Built from config when omitted.
        """
        self.config = config or ExecutorConfig()
        self.log = log or OperationLog(self.config.log_file, self.config.log_level)

    async def execute(
        self,
        operation: Callable[[], T],
        operation_name: str,
        context: Mapping[str, Any] | None = None,
    ) -> T:
        """Execute an operation with retry logic.

        Args:
            operation: Zero-argument callable. Coroutine functions and
                callables returning awaitables are awaited.
            operation_name: Descriptive name for logs and errors.
            context: Metadata attached to every log entry and the final
                error. Copied, never mutated.

        Returns:
            The operation's result.

        Raises:
            EnrichedOperationError: Retries exhausted or error not retryable.
            ValueError: operation_name is empty.
        """
        if not isinstance(operation_name, str) or not operation_name.strip():
            raise ValueError("operation_name must be a non-empty string")

        context = MappingProxyType(dict(context or {}))
        total_attempts = self.config.max_retries + 1
        attempt = 0

        while True:
            attempt += 1
            self._log_operation(
                f"Executing {operation_name}",
                LogLevel.INFO,
                operation_name,
                context,
                attempt=attempt,
            )

            try:
                result = operation()
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                normalized, category = classify_exception(e)
                strategy = RETRY_STRATEGIES[category]

                self._log_error(
                    normalized,
                    operation_name,
                    context,
                    attempt=attempt,
                    category=category.value,
                    retryable=strategy.retryable,
                )

                if not strategy.retryable or attempt >= total_attempts:
                    raise self._fail(
                        e, normalized, category, operation_name, context, attempt
                    ) from e

                delay_ms = calculate_delay(
                    attempt,
                    strategy.backoff,
                    self.config.base_delay_ms,
                    self.config.max_delay_ms,
                )

                self._log_operation(
                    f"Retrying {operation_name} in {delay_ms}ms "
                    f"(attempt {attempt + 1}/{total_attempts})",
                    LogLevel.WARN,
                    operation_name,
                    context,
                    delay_ms=delay_ms,
                    category=category.value,
                )

                await asyncio.sleep(delay_ms / 1000)
                continue

            if attempt > 1:
                self._log_operation(
                    f"{operation_name} succeeded after {attempt} attempts",
                    LogLevel.INFO,
                    operation_name,
                    context,
                    attempts=attempt,
                )

            return result

    def categorize(self, error: BaseException) -> ErrorCategory:
        """Categorize an exception the way ``execute`` would."""
        return categorize_error(NormalizedError.from_exception(error))

    def create_operation_handler(
        self,
        operation_name: str,
        context: Mapping[str, Any] | None = None,
    ) -> "OperationHandler":
        """Bind an operation name and context for repeated use.

        Args:
            operation_name: Descriptive operation name.
            context: Metadata bound to every call and log line.

        Returns:
            OperationHandler bound to this executor.
        """
        return OperationHandler(self, operation_name, context)

    def _fail(
        self,
        error: Exception,
        normalized: NormalizedError,
        category: ErrorCategory,
        operation_name: str,
        context: Mapping[str, Any],
        attempts: int,
    ) -> EnrichedOperationError:
        enriched = EnrichedOperationError(
            original_error=error,
            operation_name=operation_name,
            category=category.value,
            context=context,
            remediation_steps=get_remediation_steps(category, normalized),
            timestamp=utc_now_iso(),
            attempts=attempts,
            error_name=normalized.name,
            status_code=normalized.status_code,
        )

        self._write(
            level="FATAL",
            type=LogEntryType.FINAL_ERROR,
            operation_name=operation_name,
            error_name=normalized.name,
            error_message=normalized.message,
            error_code=normalized.status_code,
            category=category.value,
            attempts=attempts,
            context=dict(context),
            remediation_steps=list(enriched.remediation_steps),
        )

        return enriched

    def _write(self, **fields: Any) -> None:
        try:
            entry = LogEntry(**fields)
        except ValidationError as e:
            self.log.report_failure(
                "Failed to build operation log entry",
                operation_name=fields.get("operation_name"),
                error=str(e),
            )
            return
        self.log.write(entry)

    def _log_operation(
        self,
        message: str,
        level: LogLevel,
        operation_name: str,
        context: Mapping[str, Any],
        **metadata: Any,
    ) -> None:
        self._write(
            level=level.value.upper(),
            type=LogEntryType.OPERATION,
            message=message,
            operation_name=operation_name,
            context=dict(context),
            metadata=metadata,
        )

    def _log_error(
        self,
        error: NormalizedError,
        operation_name: str,
        context: Mapping[str, Any],
        **metadata: Any,
    ) -> None:
        self._write(
            level="ERROR",
            type=LogEntryType.ERROR,
            operation_name=operation_name,
            error_name=error.name,
            error_message=error.message,
            error_code=error.status_code,
            category=metadata.get("category"),
            context=dict(context),
            metadata=metadata,
        )


class OperationHandler:
    """An executor bound to one operation name and context."""

    def __init__(
        self,
        executor: ResilientExecutor,
        operation_name: str,
        context: Mapping[str, Any] | None = None,
    ):
        self.executor = executor
        self.operation_name = operation_name
        self.context = MappingProxyType(dict(context or {}))

    async def execute(self, operation: Callable[[], T]) -> T:
        return await self.executor.execute(
            operation, self.operation_name, self.context
        )

    def log_info(self, message: str, **metadata: Any) -> None:
        self._log(message, LogLevel.INFO, metadata)

    def log_warn(self, message: str, **metadata: Any) -> None:
        self._log(message, LogLevel.WARN, metadata)

    def log_error(self, error: BaseException, **metadata: Any) -> None:
        normalized, category = classify_exception(error)
        self.executor._log_error(
            normalized,
            self.operation_name,
            {**self.context, **metadata},
            category=category.value,
        )

    def _log(self, message: str, level: LogLevel, metadata: dict[str, Any]) -> None:
        self.executor._log_operation(
            message,
            level,
            self.operation_name,
            {**self.context, **metadata},
        )


# Singleton instance
_executor: ResilientExecutor | None = None


def get_executor() -> ResilientExecutor:
    """Get the process-wide executor built from environment settings.

    Returns:
        ResilientExecutor instance.
    """
    global _executor
    if _executor is None:
        from siteops.config import load_executor_config

        _executor = ResilientExecutor(load_executor_config())
    return _executor


def reset_executor() -> None:
    """Drop the process-wide executor so the next call rebuilds it."""
    global _executor
    _executor = None


async def with_retry(
    operation: Callable[[], T],
    operation_name: str,
    context: Mapping[str, Any] | None = None,
    config: ExecutorConfig | None = None,
) -> T:
    """Execute an operation with retry logic.

    Convenience function for one-off calls.

    Args:
        operation: Operation to execute.
        operation_name: Descriptive operation name.
        context: Optional metadata for logs and the final error.
        config: Optional executor configuration.

    Returns:
        Operation result.

    Raises:
        EnrichedOperationError: If the operation fails for good.
    """
    executor = ResilientExecutor(config) if config else get_executor()
    return await executor.execute(operation, operation_name, context)
