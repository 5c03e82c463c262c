"""
errors.py — Exception types rendered into the error envelope
============================================================
Every failure the service reports is a ServiceError carrying the HTTP
status, a machine-readable code and optional structural details. The
handler registered in main.create_app turns it into
{is_success: false, official_email, error: {code, message, details?}}.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for every error surfaced to API callers."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class ConfigurationError(ServiceError):
    """Raised when a required environment setting is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} is missing", code="MISSING_ENV", status_code=500)


class InvalidRequestError(ServiceError):
    """Raised when the request body fails validation."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400,
    ) -> None:
        super().__init__(message, code=code, status_code=status_code, details=details)


class RateLimitedError(ServiceError):
    """Raised when a client exceeds its per-minute request budget."""

    def __init__(self, retry_after: int) -> None:
        super().__init__(
            "Too many requests. Please retry later.",
            code="RATE_LIMITED",
            status_code=429,
        )
        self.retry_after = retry_after


class UpstreamError(ServiceError):
    """Raised when the text-generation provider fails."""

    def __init__(self, message: str, details: Dict[str, Any], status_code: int = 502) -> None:
        super().__init__(message, code="UPSTREAM_ERROR", status_code=status_code, details=details)


class InternalError(ServiceError):
    def __init__(self) -> None:
        super().__init__("Server error", code="INTERNAL_ERROR", status_code=500)
