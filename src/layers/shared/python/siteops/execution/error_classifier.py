"""Error categorization for remote management API failures.

Every failure raised by a wrapped operation is normalized once into a
``NormalizedError`` and then mapped to exactly one ``ErrorCategory``.
The category decides whether the executor retries and how it backs off:

- rate_limit, network: retried with exponential backoff
- unknown: retried with linear backoff
- everything else: never retried

Usage:
    normalized = NormalizedError.from_exception(exc)
    category = categorize_error(normalized)
    strategy = RETRY_STRATEGIES[category]
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from botocore.exceptions import ClientError


class ErrorCategory(str, Enum):
    """Classification of operation errors for retry decisions."""

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class BackoffType(str, Enum):
    """Delay growth between attempts."""

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    NONE = "none"


@dataclass(frozen=True)
class RetryStrategy:
    """Retry eligibility for one error category."""

    retryable: bool
    backoff: BackoffType


RETRY_STRATEGIES: MappingProxyType[ErrorCategory, RetryStrategy] = MappingProxyType({
    ErrorCategory.RATE_LIMIT: RetryStrategy(True, BackoffType.EXPONENTIAL),
    ErrorCategory.NETWORK: RetryStrategy(True, BackoffType.EXPONENTIAL),
    ErrorCategory.UNKNOWN: RetryStrategy(True, BackoffType.LINEAR),
    ErrorCategory.AUTHENTICATION: RetryStrategy(False, BackoffType.NONE),
    ErrorCategory.AUTHORIZATION: RetryStrategy(False, BackoffType.NONE),
    ErrorCategory.RESOURCE_NOT_FOUND: RetryStrategy(False, BackoffType.NONE),
    ErrorCategory.VALIDATION: RetryStrategy(False, BackoffType.NONE),
    ErrorCategory.CONFIGURATION: RetryStrategy(False, BackoffType.NONE),
})

# Error names CloudFront uses for "no such X" responses
NOT_FOUND_NAMES = frozenset({
    "NoSuchDistribution",
    "NoSuchFunctionExists",
    "NoSuchInvalidation",
    "NoSuchOrigin",
    "NoSuchCachePolicy",
    "NoSuchOriginRequestPolicy",
    "NoSuchResponseHeadersPolicy",
    "NoSuchOriginAccessControl",
    "NoSuchResource",
    "NoSuchBucket",
    "NoSuchKey",
})

VALIDATION_NAMES = frozenset({
    "InvalidArgument",
    "ValidationException",
    "PreconditionFailed",
})

_STATUS_ATTRIBUTES = ("status_code", "http_status", "statusCode")


@dataclass(frozen=True)
class NormalizedError:
    """Stable view of an operation failure used by the categorizer."""

    name: str = ""
    message: str = ""
    status_code: int | None = None

    @classmethod
    def from_exception(cls, error: BaseException) -> "NormalizedError":
        """Build a normalized view of an arbitrary exception.

        botocore ``ClientError`` responses supply the AWS error code as the
        name and the HTTP status from the response metadata. Other
        exceptions may carry ``name`` and a status attribute; otherwise the
        class name and ``str(error)`` are used.

        Args:
            error: Exception raised by the operation.

        Returns:
            NormalizedError for the exception.
        """
        if isinstance(error, ClientError):
            response = error.response or {}
            error_info = response.get("Error", {})
            metadata = response.get("ResponseMetadata", {})
            return cls(
                name=str(error_info.get("Code") or type(error).__name__),
                message=str(error_info.get("Message") or error),
                status_code=_as_int(metadata.get("HTTPStatusCode")),
            )

        name = getattr(error, "name", None)
        if not isinstance(name, str) or not name:
            name = type(error).__name__

        status_code = None
        for attribute in _STATUS_ATTRIBUTES:
            status_code = _as_int(getattr(error, attribute, None))
            if status_code is not None:
                break

        return cls(name=name, message=str(error), status_code=status_code)


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def categorize_error(error: NormalizedError) -> ErrorCategory:
    """Map a normalized error to its category.

    Rules are checked in a fixed order and the first match wins, so an
    ambiguous error (a 500 whose message says "invalid") lands in the
    earlier category. Message checks ignore case; name checks do not.

    Args:
        error: Normalized error.

    Returns:
        ErrorCategory for the error.
    """
    name = error.name or ""
    message = (error.message or "").lower()
    status = error.status_code or 0

    if (
        "Credential" in name
        or "credentials" in message
        or "authentication" in message
        or status == 401
    ):
        return ErrorCategory.AUTHENTICATION

    if (
        name == "AccessDenied"
        or "accessdenied" in message
        or "permission" in message
        or status == 403
    ):
        return ErrorCategory.AUTHORIZATION

    if name in NOT_FOUND_NAMES or "not found" in message or status == 404:
        return ErrorCategory.RESOURCE_NOT_FOUND

    if (
        name == "TooManyRequests"
        or "rate limit" in message
        or "throttle" in message
        or status == 429
    ):
        return ErrorCategory.RATE_LIMIT

    if (
        name in VALIDATION_NAMES
        or "validation" in message
        or "invalid" in message
        or status in (400, 412)
    ):
        return ErrorCategory.VALIDATION

    if (
        "Network" in name
        or "Timeout" in name
        or "network" in message
        or "timeout" in message
        or "connection" in message
        or status >= 500
    ):
        return ErrorCategory.NETWORK

    if (
        "configuration" in message
        or "distribution" in message
        or "function" in message
    ):
        return ErrorCategory.CONFIGURATION

    return ErrorCategory.UNKNOWN


def classify_exception(error: BaseException) -> tuple[NormalizedError, ErrorCategory]:
    """Normalize and categorize an exception in one step.

    Args:
        error: Exception raised by the operation.

    Returns:
        Tuple of (normalized error, category).
    """
    normalized = NormalizedError.from_exception(error)
    return normalized, categorize_error(normalized)
