"""Operational tooling for a static website served from S3 and CloudFront."""

__version__ = "0.1.0"
