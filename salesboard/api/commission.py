from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from salesboard.api.dependencies import get_commission_service, get_request_user_id
from salesboard.schemas.commission import CommissionResponse, SalesDetailResponse, WithholdingResponse
from salesboard.services.commission_service import CommissionService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(tags=["commission"])


@router.get("/commission")
def commission(
    user_id: Optional[str] = Depends(get_request_user_id),
    period: Optional[str] = Query(default=None),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    service: CommissionService = Depends(get_commission_service),
) -> ResponseEnvelope[CommissionResponse]:
    data = service.get_commission(user_id, period, start_date, end_date)
    return ResponseEnvelope(data=data, meta=build_meta("commissions", period or "recent"))


@router.get("/commission/sales")
def commission_sales(
    user_id: Optional[str] = Depends(get_request_user_id),
    day: Optional[date] = Query(default=None, alias="date"),
    service: CommissionService = Depends(get_commission_service),
) -> ResponseEnvelope[SalesDetailResponse]:
    data = service.get_sales_detail(user_id, day)
    return ResponseEnvelope(data=data, meta=build_meta("sales", "day"))


@router.get("/withholding")
def withholding(
    user_id: Optional[str] = Depends(get_request_user_id),
    period: Optional[str] = Query(default=None),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    service: CommissionService = Depends(get_commission_service),
) -> ResponseEnvelope[WithholdingResponse]:
    data = service.get_withholding(user_id, period, start_date, end_date)
    return ResponseEnvelope(
        data=data, meta=build_meta("commissions,withholding_limits", period or "recent")
    )
