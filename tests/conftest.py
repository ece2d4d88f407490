"""Pytest configuration and fixtures."""

import os
import pytest
from unittest.mock import AsyncMock, patch

# Set environment variables before imports
os.environ["SITEOPS_LOG_FILE"] = ""
os.environ["SITEOPS_LOG_LEVEL"] = "error"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"


class FakeApiError(Exception):
    """Error shaped like a remote management API failure."""

    def __init__(self, message="", name=None, status_code=None):
        super().__init__(message)
        if name is not None:
            self.name = name
        if status_code is not None:
            self.status_code = status_code


@pytest.fixture
def api_error():
    """Factory for FakeApiError instances."""
    return FakeApiError


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def cloudfront_client(aws_credentials):
    """Create mocked CloudFront client."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        yield boto3.client("cloudfront", region_name="us-east-1")


@pytest.fixture
def log_path(tmp_path):
    """Path of a fresh operation log file."""
    return tmp_path / "logs" / "cloudfront-errors.log"


@pytest.fixture
def executor(log_path):
    """Executor with small delays writing to a temporary log."""
    from siteops.execution.retry_policy import ExecutorConfig, ResilientExecutor

    return ResilientExecutor(ExecutorConfig(
        max_retries=3,
        base_delay_ms=100,
        max_delay_ms=1000,
        log_level="fatal",
        log_file=str(log_path),
    ))


@pytest.fixture
def mock_sleep():
    """Replace the backoff sleep so tests run instantly."""
    with patch(
        "siteops.execution.retry_policy.asyncio.sleep",
        new_callable=AsyncMock,
    ) as sleep:
        yield sleep


@pytest.fixture(autouse=True)
def reset_shared_executor():
    """Drop the process-wide executor between tests."""
    from siteops.execution.retry_policy import reset_executor

    reset_executor()
    yield
    reset_executor()


@pytest.fixture
def broken_console():
    """Point structlog at a closed stream so every console write fails."""
    import io

    import structlog

    stream = io.StringIO()
    stream.close()
    structlog.configure(
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
    yield stream
    structlog.reset_defaults()
