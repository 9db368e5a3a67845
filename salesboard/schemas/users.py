from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from salesboard.shared.base import BaseSchema


class UserProfile(BaseSchema):
    id: str
    name: str
    email: str
    tagline: Optional[str] = None
    profile_image: Optional[str] = None
    phone: Optional[str] = None
    team: str
    region: str
    joined_date: Optional[datetime] = None
    is_active: bool
    last_active: Optional[datetime] = None


class ProfileStats(BaseSchema):
    best_day: int
    best_quarter: int
    best_year: int


class Accolade(BaseSchema):
    id: Optional[str] = None
    title: str
    year: int


class UserProfileResponse(BaseSchema):
    user: UserProfile
    stats: ProfileStats
    accolades: List[Accolade]
