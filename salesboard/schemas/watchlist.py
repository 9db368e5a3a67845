from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from salesboard.shared.base import BaseSchema


class WatchlistStats(BaseSchema):
    today_sales: int
    today_revenue: float
    today_commission: float
    rank: Optional[int] = None
    streak: int = 0


class WatchlistMilestone(BaseSchema):
    type: str
    message: str


class WatchlistItem(BaseSchema):
    id: Optional[str] = None
    user_id: str
    name: str
    team: str
    region: str
    profile_image: Optional[str] = None
    tagline: Optional[str] = None
    added_at: Optional[datetime] = None
    stats: WatchlistStats
    milestones: List[WatchlistMilestone] = []


class WatchlistResponse(BaseSchema):
    watchlist: List[WatchlistItem]
    count: int
    milestone_count: int


class WatchlistAddRequest(BaseSchema):
    user_id: Optional[str] = None
    watched_user_id: Optional[str] = None


class WatchedUser(BaseSchema):
    id: str
    name: str
    team: str
    region: str


class WatchlistEntry(BaseSchema):
    id: Optional[str] = None
    user_id: str
    watched_user_id: str
    added_at: Optional[datetime] = None
    watched_user: Optional[WatchedUser] = None


class WatchlistMutationResult(BaseSchema):
    success: bool
    message: str
    entry: Optional[WatchlistEntry] = None
