from __future__ import annotations

from typing import Optional

from salesboard.shared.base import BaseSchema


class ReseedRequest(BaseSchema):
    password: Optional[str] = None


class ReseedStats(BaseSchema):
    users: int
    sales: int
    commissions: int
    withholding_limits: int


class ReseedResult(BaseSchema):
    success: bool
    message: str
    stats: ReseedStats
