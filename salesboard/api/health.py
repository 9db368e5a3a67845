from __future__ import annotations

from fastapi import APIRouter

from salesboard.core.config import get_settings
from salesboard.shared.response import ResponseEnvelope, build_meta


router = APIRouter(tags=["health"])


def _status() -> ResponseEnvelope[dict]:
    settings = get_settings()
    return ResponseEnvelope(
        data={"status": "ok", "environment": settings.environment},
        meta=build_meta("system", "now", currency=None),
    )


@router.get("/health")
def health_check() -> ResponseEnvelope[dict]:
    return _status()


@router.get("/healthz")
def health_check_liveness() -> ResponseEnvelope[dict]:
    return _status()
