from __future__ import annotations

import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pythonjsonlogger.json import JsonFormatter
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import routes_bfhl, routes_meta
from .config import Settings, get_settings
from .errors import ServiceError
from .llm import AnswerProvider, OpenAIAnswerProvider
from .rate_limit import RateLimiter, RateLimitMiddleware
from .responses import error_response
from .telemetry.logger import log_failure

logger = logging.getLogger("bfhl")

# ---------------------------------------------------------------------------
# Structured logging
# ---------------------------------------------------------------------------

def _configure_logging(settings: Settings) -> None:
    """Configure structured JSON logging when log_format=json (default)."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format == "json":
        formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[AnswerProvider] = None,
    limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Build the API around explicit collaborators.

    Settings, the answer provider and the rate limiter are held on
    app.state; nothing is read from module globals at request time, so
    two apps never share buckets.
    """
    settings = settings or get_settings()

    # Python chokes on rendering huge ints as JSON; an LCM of 2000 values
    # easily runs past the default 4300 digits. This removes the limit.
    sys.set_int_max_str_digits(0)

    app = FastAPI(
        title="BFHL API",
        version="1.0.0",
        description=(
            "Numeric utilities (Fibonacci, prime filtering, HCF/LCM) and a "
            "single-word question answering passthrough, behind per-client "
            "rate limiting and strict request validation."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.answer_provider = provider or OpenAIAnswerProvider.from_settings(settings)
    app.state.rate_limiter = limiter or RateLimiter(settings.rate_limit_rpm)

    app.add_middleware(RateLimitMiddleware)

    @app.exception_handler(ServiceError)
    async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        log_failure(exc, request.url.path, get_remote_address(request))
        return error_response(request.app.state.settings, exc)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # A known path with the wrong method is still "no such route".
        if exc.status_code in (404, 405):
            err = ServiceError("Route not found", code="NOT_FOUND", status_code=404)
        else:
            err = ServiceError(str(exc.detail), code="HTTP_ERROR", status_code=exc.status_code)
        return error_response(request.app.state.settings, err)

    app.include_router(routes_meta.router)
    app.include_router(routes_bfhl.router)
    return app


_settings = get_settings()
_configure_logging(_settings)

app = create_app(_settings)


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    logger.info("BFHL API running on port %d", _settings.port)
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_config=None)
