"""Structured operation log records."""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    """Get current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class LogEntryType(str, Enum):
    """Kinds of operation log record."""

    OPERATION = "OPERATION"  # Attempt start, retry notice, progress line
    ERROR = "ERROR"  # A single failed attempt
    FINAL_ERROR = "FINAL_ERROR"  # Terminal failure of a call


class LogEntry(BaseModel):
    """A single append-only operation log record.

    Entries are frozen once built and written to the sink as one JSON
    object per line. Fields that do not apply to an entry type are left
    as None and omitted from the serialized line.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=True,
    )

    timestamp: str = Field(default_factory=utc_now_iso)
    level: str = Field(..., description="Upper-case level name, e.g. INFO")
    type: LogEntryType = Field(..., description="Record kind")

    message: str | None = None
    operation_name: str | None = Field(None, alias="operationName")
    error_name: str | None = Field(None, alias="errorName")
    error_message: str | None = Field(None, alias="errorMessage")
    error_code: int | None = Field(None, alias="errorCode")
    category: str | None = None
    attempts: int | None = None
    context: dict[str, Any] | None = None
    remediation_steps: list[str] | None = Field(None, alias="remediationSteps")
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_json_line(self) -> str:
        """Serialize to a single newline-terminated JSON line.

        Values that are not JSON-native (for example datetimes inside the
        caller's context) are rendered with ``str``.
        """
        data = self.model_dump(by_alias=True, exclude_none=True)
        return json.dumps(data, default=str) + "\n"

    @classmethod
    def from_json_line(cls, line: str) -> "LogEntry":
        """Parse a line written by ``to_json_line``."""
        return cls.model_validate_json(line.strip())
