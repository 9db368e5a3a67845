from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, List

from salesboard.models.sales import SaleRecord, UserRecord
from salesboard.shared.time import month_start

DEMO_WEEK_START = date(2026, 1, 18)
DEMO_WEEK_END = date(2026, 1, 24)


@dataclass(frozen=True)
class DailyVolumeProfile:
    min_sales: int
    max_sales: int
    cancel_probability: float
    install_probability: float


REGULAR_DAY = DailyVolumeProfile(min_sales=3, max_sales=6, cancel_probability=0.12, install_probability=0.75)
DEMO_WEEK_DAY = DailyVolumeProfile(min_sales=5, max_sales=8, cancel_probability=0.08, install_probability=0.85)


def volume_profile_for(day: date) -> DailyVolumeProfile:
    if DEMO_WEEK_START <= day <= DEMO_WEEK_END:
        return DEMO_WEEK_DAY
    return REGULAR_DAY


def generate_sales(users: Iterable[UserRecord], now: datetime, rng: random.Random) -> List[SaleRecord]:
    """Simulated sales for every user from the start of last month through today."""
    first_day = month_start(now, -1).date()
    last_day = now.date()
    sales: List[SaleRecord] = []
    for user in users:
        day = first_day
        while day <= last_day:
            profile = volume_profile_for(day)
            for _ in range(rng.randint(profile.min_sales, profile.max_sales)):
                sold_at = datetime(
                    day.year,
                    day.month,
                    day.day,
                    rng.randint(8, 18),
                    rng.randint(0, 59),
                    rng.randint(0, 59),
                    tzinfo=now.tzinfo,
                )
                revenue = rng.randint(30, 150)
                is_canceled = rng.random() < profile.cancel_probability
                is_install = not is_canceled and rng.random() < profile.install_probability
                sales.append(
                    SaleRecord(
                        user_id=user.id,
                        date=sold_at,
                        revenue=Decimal(revenue),
                        accounts_sold=1,
                        is_canceled=is_canceled,
                        is_install=is_install,
                    )
                )
            day += timedelta(days=1)
    return sales
