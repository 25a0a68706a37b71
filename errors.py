"""
Exception taxonomy for the audit pipeline.

Only ValidationError, ConfigurationError and UpstreamAPIError (with its schema
subclass) ever reach a caller. FetchError is raised by the fetcher and always
absorbed by an analyzer's fallback boundary.
"""
from __future__ import annotations

from typing import Optional


class AuditError(Exception):
    """Base class for every error raised by the audit pipeline."""


class ValidationError(AuditError):
    """The audited URL is missing or is not an absolute http(s) URL."""


class ConfigurationError(AuditError):
    """A required runtime setting (the PageSpeed API key) is absent."""


class UpstreamAPIError(AuditError):
    """The PageSpeed Insights API failed or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamSchemaError(UpstreamAPIError):
    """The PageSpeed response is missing fields the report depends on."""


class FetchError(AuditError):
    """A request to the audited site failed at the transport level."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
