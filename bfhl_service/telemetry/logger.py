from __future__ import annotations

import logging

from ..errors import ServiceError

logger = logging.getLogger("bfhl.requests")


def log_success(operation: str, duration_ms: float, client: str) -> None:
    """Record a completed /bfhl operation."""
    logger.info(
        "bfhl %s ok",
        operation,
        extra={
            "operation": operation,
            "status_code": 200,
            "duration_ms": round(duration_ms, 2),
            "client": client,
        },
    )


def log_failure(err: ServiceError, path: str, client: str) -> None:
    """
    Record a request that ended in an error envelope.

    Client mistakes are logged at INFO; configuration, upstream and
    internal failures at WARNING so they stand out in aggregation.
    """
    level = logging.INFO if err.status_code < 500 else logging.WARNING
    logger.log(
        level,
        "%s failed: %s",
        path,
        err.code,
        extra={
            "path": path,
            "code": err.code,
            "status_code": err.status_code,
            "client": client,
        },
    )
