from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from salesboard.api.dependencies import get_request_user_id, get_watchlist_service
from salesboard.schemas.watchlist import WatchlistAddRequest, WatchlistMutationResult, WatchlistResponse
from salesboard.services.watchlist_service import WatchlistService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("")
def list_watchlist(
    user_id: Optional[str] = Depends(get_request_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> ResponseEnvelope[WatchlistResponse]:
    data = service.list_watchlist(user_id)
    return ResponseEnvelope(data=data, meta=build_meta("watchlist,sales,commissions", "today"))


@router.post("")
def add_to_watchlist(
    payload: WatchlistAddRequest,
    service: WatchlistService = Depends(get_watchlist_service),
) -> ResponseEnvelope[WatchlistMutationResult]:
    data = service.add(payload)
    return ResponseEnvelope(data=data, meta=build_meta("watchlist", "now", currency=None))


@router.delete("")
def remove_from_watchlist(
    user_id: Optional[str] = Depends(get_request_user_id),
    watched_user_id: Optional[str] = Query(default=None),
    service: WatchlistService = Depends(get_watchlist_service),
) -> ResponseEnvelope[WatchlistMutationResult]:
    data = service.remove(user_id, watched_user_id)
    return ResponseEnvelope(data=data, meta=build_meta("watchlist", "now", currency=None))
