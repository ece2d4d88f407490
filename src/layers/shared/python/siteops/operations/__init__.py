"""Resilient helpers for CloudFront management operations."""

from siteops.operations.cloudfront import CloudFrontOperationHelpers

__all__ = ["CloudFrontOperationHelpers"]
