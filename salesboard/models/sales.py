from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_validator


def assume_utc(value: Optional[datetime]) -> Optional[datetime]:
    # `timestamp without time zone` columns hold UTC wall-clock values.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserRecord(BaseModel):
    id: str
    email: str
    name: str
    tagline: Optional[str] = None
    profile_image: Optional[str] = None
    phone: Optional[str] = None
    team: str = ""
    region: str = ""
    joined_date: Optional[datetime] = None
    is_active: bool = True
    last_active: Optional[datetime] = None

    @field_validator("joined_date", "last_active", mode="after")
    @classmethod
    def attach_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return assume_utc(value)


class SaleRecord(BaseModel):
    id: Optional[str] = None
    user_id: str
    date: datetime
    revenue: Decimal = Decimal("0")
    accounts_sold: int = 1
    is_canceled: bool = False
    is_install: bool = False

    @field_validator("date", mode="after")
    @classmethod
    def attach_timezone(cls, value: datetime) -> datetime:
        return assume_utc(value)


class CommissionRecord(BaseModel):
    id: Optional[str] = None
    user_id: str
    date: date
    accounts_sold: int = 0
    earned_amount: Decimal = Decimal("0")
    withheld_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    pay_period_start: date
    pay_period_end: date
    is_paid: bool = False


class WithholdingLimitRecord(BaseModel):
    id: Optional[str] = None
    user_id: str
    current_amount: Decimal = Decimal("0")
    limit_amount: Decimal = Decimal("3000")
    reset_date: Optional[date] = None
    updated_at: Optional[datetime] = None

    @field_validator("updated_at", mode="after")
    @classmethod
    def attach_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return assume_utc(value)


class AccoladeRecord(BaseModel):
    id: Optional[str] = None
    user_id: str
    title: str
    year: int


class WatchlistRecord(BaseModel):
    id: Optional[str] = None
    user_id: str
    watched_user_id: str
    added_at: Optional[datetime] = None

    @field_validator("added_at", mode="after")
    @classmethod
    def attach_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return assume_utc(value)
