from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------

class HealthEnvelope(BaseModel):
    is_success: bool = True
    official_email: str


class SuccessEnvelope(BaseModel):
    """Successful /bfhl result."""

    is_success: bool = True
    official_email: str
    data: Union[List[int], int, str] = Field(
        ...,
        description=(
            "fibonacci and prime return an integer array, lcm and hcf a single "
            "integer, AI a single word."
        ),
    )


class ErrorBody(BaseModel):
    code: str = Field(..., description="Machine-readable error code, e.g. INVALID_KEYS.")
    message: str
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Structural context such as the offending index or unknown key names.",
    )


class ErrorEnvelope(BaseModel):
    is_success: bool = False
    official_email: str
    error: ErrorBody
