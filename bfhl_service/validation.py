"""
validation.py — Request gate for POST /bfhl
============================================
Checks run in a fixed order and the first failure wins:

  1. Content-Type must be application/json
  2. Body must fit within the configured size
  3. Body must parse to a single JSON object
  4. Every key must be one of the recognised operations
  5. Exactly one recognised key must be present
  6. The value must have the shape its operation expects

The configuration checks (OFFICIAL_EMAIL, OPENAI_API_KEY) are done by the
route, since they depend on settings rather than on the request.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

from .errors import InvalidRequestError

ALLOWED_KEYS = ("fibonacci", "prime", "lcm", "hcf", "AI")

MAX_FIBONACCI = 2000
MAX_ARRAY_LENGTH = 2000
# Largest integer a JSON number carries exactly in IEEE-754 doubles.
MAX_SAFE_INTEGER = 2**53 - 1


def as_integer(value: Any) -> Optional[int]:
    """Return value as an int if it is an integral JSON number, else None.

    JSON has a single number type, so 5.0 counts as the integer 5.
    Booleans are rejected even though bool subclasses int.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def check_content_type(content_type: Optional[str]) -> None:
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type != "application/json":
        raise InvalidRequestError(
            "INVALID_CONTENT_TYPE", "Content-Type must be application/json"
        )


def parse_body(raw: bytes, max_bytes: int) -> dict:
    if len(raw) > max_bytes:
        raise InvalidRequestError(
            "PAYLOAD_TOO_LARGE",
            f"Request body too large (max {max_bytes} bytes)",
            status_code=413,
        )
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        # covers bad UTF-8, syntax errors and oversized integer literals
        raise InvalidRequestError("INVALID_JSON", "Body must be a JSON object")
    if not isinstance(body, dict):
        raise InvalidRequestError("INVALID_JSON", "Body must be a JSON object")
    return body


def select_operation(body: dict) -> Tuple[str, Any]:
    """Return the single (key, value) pair the request asks for."""
    keys = list(body.keys())
    present = [k for k in keys if k in ALLOWED_KEYS]
    unknown = [k for k in keys if k not in ALLOWED_KEYS]

    if unknown:
        raise InvalidRequestError(
            "UNKNOWN_KEY",
            "Only one of fibonacci, prime, lcm, hcf, AI is allowed",
            details={"unknown_keys": unknown},
        )
    if len(present) != 1:
        raise InvalidRequestError(
            "INVALID_KEYS",
            "Request must contain exactly one of: fibonacci, prime, lcm, hcf, AI",
            details={"received_keys": keys},
        )
    key = present[0]
    return key, body[key]


def validate_fibonacci(value: Any) -> int:
    n = as_integer(value)
    if n is None or n < 0:
        raise InvalidRequestError(
            "INVALID_FIBONACCI", "fibonacci must be a non-negative integer"
        )
    if n > MAX_FIBONACCI:
        raise InvalidRequestError(
            "FIB_TOO_LARGE", f"fibonacci too large (max {MAX_FIBONACCI})"
        )
    return n


def validate_question(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError("INVALID_AI", "AI must be a non-empty string question")
    return value


def validate_integer_array(key: str, value: Any) -> List[int]:
    if not isinstance(value, list) or not value:
        raise InvalidRequestError(
            "INVALID_ARRAY", f"{key} must be a non-empty integer array"
        )
    if len(value) > MAX_ARRAY_LENGTH:
        raise InvalidRequestError(
            "ARRAY_TOO_LARGE", f"Array too large (max {MAX_ARRAY_LENGTH} elements)"
        )
    out: List[int] = []
    for i, item in enumerate(value):
        n = as_integer(item)
        if n is None:
            raise InvalidRequestError(
                "INVALID_ARRAY_ELEMENT",
                "All array elements must be integers",
                details={"index": i, "value": item},
            )
        if abs(n) > MAX_SAFE_INTEGER:
            raise InvalidRequestError(
                "INVALID_ARRAY_ELEMENT",
                f"Array elements must be between -{MAX_SAFE_INTEGER} and {MAX_SAFE_INTEGER}",
                details={"index": i, "value": item},
            )
        out.append(n)
    return out


def parse_request(content_type: Optional[str], raw: bytes, max_bytes: int) -> Tuple[str, Any]:
    """Run the full gate and return (key, normalised value)."""
    check_content_type(content_type)
    body = parse_body(raw, max_bytes)
    key, value = select_operation(body)

    if key == "fibonacci":
        return key, validate_fibonacci(value)
    if key == "AI":
        return key, validate_question(value)
    return key, validate_integer_array(key, value)
