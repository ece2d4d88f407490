"""Pydantic models for siteops records."""

from siteops.models.log_entry import LogEntry, LogEntryType, utc_now_iso

__all__ = [
    "LogEntry",
    "LogEntryType",
    "utc_now_iso",
]
