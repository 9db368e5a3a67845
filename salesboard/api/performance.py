from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from salesboard.api.dependencies import get_performance_service, get_request_user_id
from salesboard.schemas.performance import PerformanceResponse
from salesboard.services.performance_service import PerformanceService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/performance", tags=["performance"])


@router.get("")
def performance(
    user_id: Optional[str] = Depends(get_request_user_id),
    period: str = Query(default="today", alias="date"),
    service: PerformanceService = Depends(get_performance_service),
) -> ResponseEnvelope[PerformanceResponse]:
    data = service.get_performance(user_id, period)
    return ResponseEnvelope(data=data, meta=build_meta("sales,users", period))
