from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from .config import Settings
from .errors import RateLimitedError, ServiceError
from .schemas import ErrorBody, ErrorEnvelope, SuccessEnvelope


def success_response(settings: Settings, data: Any) -> JSONResponse:
    envelope = SuccessEnvelope(official_email=settings.official_email, data=data)
    return JSONResponse(content=envelope.model_dump())


def error_response(settings: Settings, err: ServiceError) -> JSONResponse:
    """Render a ServiceError into the failure envelope."""
    envelope = ErrorEnvelope(
        official_email=settings.official_email,
        error=ErrorBody(code=err.code, message=err.message, details=err.details),
    )
    content = envelope.model_dump()
    if err.details is None:
        del content["error"]["details"]

    headers = None
    if isinstance(err, RateLimitedError):
        headers = {"Retry-After": str(err.retry_after)}
    return JSONResponse(status_code=err.status_code, content=content, headers=headers)
