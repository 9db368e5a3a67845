from __future__ import annotations

from fastapi import APIRouter, Depends

from salesboard.api.dependencies import get_reseed_service
from salesboard.schemas.admin import ReseedRequest, ReseedResult
from salesboard.services.reseed_service import ReseedService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/reseed")
def reseed(
    payload: ReseedRequest,
    service: ReseedService = Depends(get_reseed_service),
) -> ResponseEnvelope[ReseedResult]:
    data = service.reseed(payload.password)
    return ResponseEnvelope(data=data, meta=build_meta("users,sales,commissions", "now", currency=None))
