from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from salesboard.shared.base import BaseSchema


class PerformanceUser(BaseSchema):
    id: str
    name: str
    team: str
    region: str


class PerformanceMetrics(BaseSchema):
    sales: int
    revenue: int
    installs: int
    cancels: int


class PerformanceTrends(BaseSchema):
    sales: int
    revenue: int
    installs: int
    cancels: int


class RankingSnapshotRow(BaseSchema):
    rank: int
    user_id: str
    name: str
    team: str
    sales: int
    cancels: int


class PerformanceRanking(BaseSchema):
    current_rank: Optional[int] = None
    top_performers: List[RankingSnapshotRow]


class PerformanceResponse(BaseSchema):
    user: PerformanceUser
    metrics: PerformanceMetrics
    trends: PerformanceTrends
    ranking: PerformanceRanking
    period_start: datetime
    period_end: Optional[datetime] = None
    previous_period_start: datetime
    previous_period_end: datetime
