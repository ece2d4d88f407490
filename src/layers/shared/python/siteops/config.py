"""Environment-driven settings for the shared executor."""

import os

from siteops.execution.retry_policy import DEFAULT_LOG_FILE, ExecutorConfig

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_MS = 1000
DEFAULT_MAX_DELAY_MS = 30000
DEFAULT_LOG_LEVEL = "info"


def load_executor_config() -> ExecutorConfig:
    """Build an ExecutorConfig from the current environment.

    Reads the environment at call time so tests and scripts can override
    settings after import. An empty SITEOPS_LOG_FILE disables the file sink.

    Returns:
        ExecutorConfig instance.
    """
    return ExecutorConfig(
        max_retries=int(os.environ.get("SITEOPS_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
        base_delay_ms=int(os.environ.get("SITEOPS_BASE_DELAY_MS", DEFAULT_BASE_DELAY_MS)),
        max_delay_ms=int(os.environ.get("SITEOPS_MAX_DELAY_MS", DEFAULT_MAX_DELAY_MS)),
        log_level=os.environ.get("SITEOPS_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_file=os.environ.get("SITEOPS_LOG_FILE", DEFAULT_LOG_FILE) or None,
    )
