from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from salesboard.shared.base import BaseSchema, FilterSchema


class LeaderboardFilters(FilterSchema):
    period: str = "today"
    region: str = "all"
    state: str = "all"
    rank_type: str = Field(default="individual", pattern="^(individual|team)$")
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class LeaderboardRow(BaseSchema):
    rank: int
    user_id: Optional[str] = None
    name: str
    team: str
    region: str
    sales: int
    cancels: int
    revenue: float
    installs: int
    member_count: int = 1


class LeaderboardResponse(BaseSchema):
    period_start: datetime
    period_end: Optional[datetime] = None
    top_performer: Optional[LeaderboardRow] = None
    rankings: List[LeaderboardRow]
    filters: LeaderboardFilters
