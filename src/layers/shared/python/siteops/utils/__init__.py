"""Shared utilities."""

from siteops.utils.exceptions import EnrichedOperationError, SiteOpsError

__all__ = [
    "EnrichedOperationError",
    "SiteOpsError",
]
