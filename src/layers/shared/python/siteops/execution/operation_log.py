"""Append-only operation log with a structlog console echo.

Every entry is written to a newline-delimited JSON file and, when its
level is at or above the configured threshold, echoed to the console
through structlog. Writing is best effort: a sink failure is reported
on the fallback logger and never reaches the caller.
"""

import threading
from contextlib import suppress
from enum import Enum
from pathlib import Path

import structlog

from siteops.models.log_entry import LogEntry

logger = structlog.get_logger()


class LogLevel(str, Enum):
    """Operation log levels, lowest first."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    @classmethod
    def parse(cls, value: "str | LogLevel") -> "LogLevel":
        """Parse a level name, accepting "warning" and any case."""
        if isinstance(value, LogLevel):
            return value
        normalized = str(value).strip().lower()
        if normalized == "warning":
            normalized = "warn"
        return cls(normalized)


_LEVEL_ORDER = list(LogLevel)

# structlog method used for each level's console echo
_ECHO_METHODS = {
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARN: "warning",
    LogLevel.ERROR: "error",
    LogLevel.FATAL: "critical",
}


class OperationLog:
    """Append-only sink for ``LogEntry`` records.

    Example:
        log = OperationLog("logs/cloudfront-errors.log", LogLevel.WARN)
        log.write(entry)

        for entry in log.read_entries():
            print(entry.type, entry.operation_name)
    """

    def __init__(
        self,
        path: str | Path | None = None,
        console_level: LogLevel | str = LogLevel.INFO,
    ):
        """Initialize the operation log.

        Args:
            path: JSONL file to append to. None keeps console echo only.
            console_level: Minimum level echoed to the console.
        """
        self.path = Path(path) if path is not None else None
        self.console_level = LogLevel.parse(console_level)
        self.logger = logger.bind(service="operation_log")
        self._lock = threading.Lock()

        self._ensure_log_directory()

    def _ensure_log_directory(self) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.report_failure(
                "Failed to create log directory",
                path=str(self.path.parent),
                error=str(e),
            )

    def should_echo(self, level: LogLevel | str) -> bool:
        """Check whether a level passes the console threshold."""
        return LogLevel.parse(level).rank >= self.console_level.rank

    def write(self, entry: LogEntry) -> None:
        """Append an entry to the sink and echo it if above threshold.

        Args:
            entry: Record to append.
        """
        self._append(entry)

        level = LogLevel.parse(entry.level)
        if not self.should_echo(level):
            return
        try:
            self._echo(level, entry)
        except Exception as e:
            self.report_failure(
                "Failed to echo operation log entry",
                operation_name=entry.operation_name,
                error=str(e),
            )

    def report_failure(self, event: str, **fields) -> None:
        """Report a sink failure on structlog, ignoring a broken logger."""
        with suppress(Exception):
            self.logger.warning(event, **fields)

    def _append(self, entry: LogEntry) -> None:
        if self.path is None:
            return
        try:
            line = entry.to_json_line()
            # One write per line under the lock keeps lines whole
            with self._lock:
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(line)
        except (OSError, TypeError, ValueError) as e:
            self.report_failure(
                "Failed to write operation log",
                path=str(self.path),
                error=str(e),
            )

    def _echo(self, level: LogLevel, entry: LogEntry) -> None:
        event = entry.message or (
            f"{entry.operation_name} failed - {entry.error_message}"
        )
        fields = entry.model_dump(
            exclude={"message", "level", "timestamp"},
            exclude_none=True,
        )
        if not fields.get("metadata"):
            fields.pop("metadata", None)
        getattr(self.logger, _ECHO_METHODS[level])(event, **fields)

    def read_entries(self) -> list[LogEntry]:
        """Parse every entry currently in the log file.

        Returns:
            Entries in append order. Empty when there is no file.
        """
        if self.path is None or not self.path.exists():
            return []

        with self._lock:
            lines = self.path.read_text(encoding="utf-8").splitlines()

        return [LogEntry.from_json_line(line) for line in lines if line.strip()]
