from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from slowapi.util import get_remote_address
from starlette.concurrency import run_in_threadpool

from ..config import Settings
from ..errors import ConfigurationError, InternalError, ServiceError
from ..llm import AnswerProvider
from ..numeric import fibonacci, hcf, lcm_list, primes_from_list
from ..responses import success_response
from ..schemas import ErrorEnvelope, SuccessEnvelope
from ..telemetry.logger import log_success
from ..validation import parse_request

logger = logging.getLogger("bfhl.requests")

router = APIRouter(tags=["bfhl"])

NUMERIC_OPERATIONS: Dict[str, Callable[[Any], Any]] = {
    "fibonacci": fibonacci,
    "prime": primes_from_list,
    "lcm": lcm_list,
    "hcf": hcf,
}


async def dispatch(key: str, value: Any, settings: Settings, provider: AnswerProvider) -> Any:
    """Run the operation named by key on an already validated value.

    Numeric work runs in the threadpool so a slow prime scan never holds
    the event loop.
    """
    if key in NUMERIC_OPERATIONS:
        return await run_in_threadpool(NUMERIC_OPERATIONS[key], value)
    if key == "AI":
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY")
        return await provider.single_word(value)
    raise ValueError(f"unsupported operation {key!r}")


@router.post(
    "/bfhl",
    response_model=SuccessEnvelope,
    responses={
        400: {"model": ErrorEnvelope},
        413: {"model": ErrorEnvelope},
        429: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
        502: {"model": ErrorEnvelope},
    },
)
async def bfhl(request: Request) -> JSONResponse:
    """Run exactly one of fibonacci, prime, lcm, hcf or AI.

    The body is read raw rather than through a pydantic model so each
    validation failure can be reported with its own error code.
    """
    settings: Settings = request.app.state.settings
    provider: AnswerProvider = request.app.state.answer_provider
    started = time.perf_counter()

    try:
        if not settings.official_email:
            raise ConfigurationError("OFFICIAL_EMAIL")

        raw = await request.body()
        key, value = parse_request(
            request.headers.get("content-type"), raw, settings.max_body_bytes
        )
        data = await dispatch(key, value, settings, provider)
        response = success_response(settings, data)
    except ServiceError:
        raise
    except Exception:
        logger.exception("Unhandled error in /bfhl")
        raise InternalError()

    log_success(key, (time.perf_counter() - started) * 1000, get_remote_address(request))
    return response
