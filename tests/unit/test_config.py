"""Tests for environment-driven settings."""

from siteops.config import load_executor_config
from siteops.execution.operation_log import LogLevel
from siteops.execution.retry_policy import DEFAULT_LOG_FILE


class TestLoadExecutorConfig:
    """Tests for load_executor_config."""

    def test_defaults(self, monkeypatch):
        for name in (
            "SITEOPS_MAX_RETRIES",
            "SITEOPS_BASE_DELAY_MS",
            "SITEOPS_MAX_DELAY_MS",
            "SITEOPS_LOG_LEVEL",
            "SITEOPS_LOG_FILE",
        ):
            monkeypatch.delenv(name, raising=False)

        config = load_executor_config()

        assert config.max_retries == 3
        assert config.base_delay_ms == 1000
        assert config.max_delay_ms == 30000
        assert config.log_file == DEFAULT_LOG_FILE
        assert config.log_level == LogLevel.INFO

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SITEOPS_MAX_RETRIES", "1")
        monkeypatch.setenv("SITEOPS_BASE_DELAY_MS", "250")
        monkeypatch.setenv("SITEOPS_MAX_DELAY_MS", "5000")
        monkeypatch.setenv("SITEOPS_LOG_LEVEL", "WARN")
        monkeypatch.setenv("SITEOPS_LOG_FILE", str(tmp_path / "ops.log"))

        config = load_executor_config()

        assert config.max_retries == 1
        assert config.base_delay_ms == 250
        assert config.max_delay_ms == 5000
        assert config.log_level == LogLevel.WARN
        assert config.log_file == str(tmp_path / "ops.log")

    def test_empty_log_file_disables_sink(self, monkeypatch):
        monkeypatch.setenv("SITEOPS_LOG_FILE", "")

        assert load_executor_config().log_file is None

    def test_default_log_file_constant(self):
        assert DEFAULT_LOG_FILE.endswith("cloudfront-errors.log")
