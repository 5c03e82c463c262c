"""
rate_limit.py — Per-client fixed-window request limiting
=========================================================
Uses the `limits` fixed-window strategy (the engine behind slowapi) over
an in-memory store. The first request from a client opens a 60-second
window; once the count passes the per-minute limit, further requests are
rejected until the window expires. Rejections never extend the window.

Each RateLimiter owns its own MemoryStorage and is owned by one app, so
every app (and every test) starts with no buckets. Entries are never
evicted before their window ends.
"""
from __future__ import annotations

import logging
import math
import time
from typing import Optional

from fastapi import Request
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from .errors import RateLimitedError
from .responses import error_response

logger = logging.getLogger("bfhl.rate_limit")


class RateLimiter:
    """Fixed-window counter keyed by client address."""

    def __init__(self, limit: int, storage: Optional[MemoryStorage] = None) -> None:
        self.limit = max(1, limit)
        self.item = parse(f"{self.limit}/minute")
        self.storage = storage or MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self.storage)

    def hit(self, key: str) -> bool:
        """Count one request for key. Returns False when it must be rejected."""
        return self._strategy.hit(self.item, key)

    def retry_after(self, key: str) -> int:
        """Whole seconds until key's window resets (0 if it has no open window)."""
        stats = self._strategy.get_window_stats(self.item, key)
        return max(0, math.ceil(stats.reset_time - time.time()))


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies the app's RateLimiter to every incoming request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: RateLimiter = request.app.state.rate_limiter
        key = get_remote_address(request)
        if not limiter.hit(key):
            retry_after = limiter.retry_after(key)
            logger.warning(
                "Rate limit exceeded for %s (limit=%d/min)", key, limiter.limit,
                extra={"client": key, "retry_after": retry_after},
            )
            # Middleware sits outside the exception handlers, so render directly.
            return error_response(request.app.state.settings, RateLimitedError(retry_after))
        return await call_next(request)
