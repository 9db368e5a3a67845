from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from salesboard.api.dependencies import get_leaderboard_service
from salesboard.schemas.leaderboard import LeaderboardFilters, LeaderboardResponse
from salesboard.services.leaderboard_service import LeaderboardService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def get_leaderboard_filters(
    period: str = Query(default="today", alias="date"),
    region: str = Query(default="all"),
    state: str = Query(default="all"),
    rank_type: str = Query(default="individual", pattern="^(individual|team)$"),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
) -> LeaderboardFilters:
    return LeaderboardFilters(
        period=period,
        region=region,
        state=state,
        rank_type=rank_type,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("")
def leaderboard(
    filters: LeaderboardFilters = Depends(get_leaderboard_filters),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> ResponseEnvelope[LeaderboardResponse]:
    data = service.get_leaderboard(filters)
    return ResponseEnvelope(data=data, meta=build_meta("sales,users", filters.period))
