from __future__ import annotations

from fastapi import APIRouter, Request

from ..schemas import HealthEnvelope

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthEnvelope)
def health(request: Request) -> HealthEnvelope:
    return HealthEnvelope(official_email=request.app.state.settings.official_email)
