from __future__ import annotations

import os
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

from salesboard.core.config import get_settings  # noqa: E402
from salesboard.main import create_app  # noqa: E402
from salesboard.models.sales import (  # noqa: E402
    AccoladeRecord,
    CommissionRecord,
    SaleRecord,
    UserRecord,
    WatchlistRecord,
    WithholdingLimitRecord,
)

REFERENCE_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_settings(**overrides: object) -> SimpleNamespace:
    values = {
        "reporting_timezone": "UTC",
        "reporting_reference_date": REFERENCE_NOW,
        "commission_rate": Decimal("0.25"),
        "withholding_rate": Decimal("0.20"),
        "withholding_limit_amount": Decimal("3000"),
        "commission_payable_after_days": 7,
        "commission_recent_limit": 10,
        "leaderboard_top_count": 4,
        "reseed_secret": "open-sesame",
        "reseed_random_seed": 2026,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_user(user_id: str, name: str, team: str = "North Team", region: str = "North") -> UserRecord:
    return UserRecord(id=user_id, email=f"{user_id}@example.com", name=name, team=team, region=region)


def make_sale(
    user_id: str,
    when: datetime,
    revenue: int = 100,
    is_canceled: bool = False,
    is_install: bool = False,
    sale_id: Optional[str] = None,
) -> SaleRecord:
    return SaleRecord(
        id=sale_id,
        user_id=user_id,
        date=when,
        revenue=Decimal(revenue),
        is_canceled=is_canceled,
        is_install=is_install,
    )


class StubUsersRepository:
    def __init__(self, users: Optional[List[UserRecord]] = None) -> None:
        self.users = sorted(users or [], key=lambda user: (user.name, user.id))
        self.accolades: List[AccoladeRecord] = []

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return next((user for user in self.users if user.id == user_id), None)

    def get_first_user(self) -> Optional[UserRecord]:
        return self.users[0] if self.users else None

    def list_users(
        self, region: Optional[str] = None, team_contains: Optional[str] = None
    ) -> List[UserRecord]:
        return [
            user
            for user in self.users
            if (region is None or user.region == region)
            and (team_contains is None or team_contains in user.team)
        ]

    def list_users_by_ids(self, user_ids: List[str]) -> List[UserRecord]:
        return [user for user in self.users if user.id in user_ids]

    def list_accolades(self, user_id: str) -> List[AccoladeRecord]:
        return [accolade for accolade in self.accolades if accolade.user_id == user_id]


class StubSalesRepository:
    def __init__(self, sales: Optional[List[SaleRecord]] = None) -> None:
        self.sales = list(sales or [])
        self.deleted = False

    def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[str] = None,
        user_ids: Optional[List[str]] = None,
    ) -> List[SaleRecord]:
        return [
            sale
            for sale in self.sales
            if (start is None or sale.date >= start)
            and (end is None or sale.date <= end)
            and (user_id is None or sale.user_id == user_id)
            and (user_ids is None or sale.user_id in user_ids)
        ]

    def create_sales(self, sales: List[SaleRecord]) -> int:
        self.sales.extend(sales)
        return len(sales)

    def delete_all_sales(self) -> None:
        self.deleted = True
        self.sales = []


class StubCommissionsRepository:
    def __init__(
        self,
        commissions: Optional[List[CommissionRecord]] = None,
        limits: Optional[Dict[str, WithholdingLimitRecord]] = None,
    ) -> None:
        self.commissions = list(commissions or [])
        self.limits = dict(limits or {})

    def list_commissions(
        self,
        user_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        user_ids: Optional[List[str]] = None,
    ) -> List[CommissionRecord]:
        rows = sorted(
            (
                row
                for row in self.commissions
                if (user_id is None or row.user_id == user_id)
                and (user_ids is None or row.user_id in user_ids)
                and (start_date is None or row.date >= start_date)
                and (end_date is None or row.date <= end_date)
            ),
            key=lambda row: row.date,
            reverse=True,
        )
        return rows[:limit] if limit is not None else rows

    def create_commissions(self, commissions: List[CommissionRecord]) -> int:
        self.commissions.extend(commissions)
        return len(commissions)

    def delete_all_commissions(self) -> None:
        self.commissions = []

    def get_withholding_limit(self, user_id: str) -> Optional[WithholdingLimitRecord]:
        return self.limits.get(user_id)

    def create_withholding_limits(self, limits: List[WithholdingLimitRecord]) -> int:
        for limit in limits:
            self.limits[limit.user_id] = limit
        return len(limits)

    def delete_all_withholding_limits(self) -> None:
        self.limits = {}


class StubWatchlistRepository:
    def __init__(self, entries: Optional[List[WatchlistRecord]] = None) -> None:
        self.entries = list(entries or [])

    def list_entries(self, user_id: str) -> List[WatchlistRecord]:
        return [entry for entry in self.entries if entry.user_id == user_id]

    def get_entry(self, user_id: str, watched_user_id: str) -> Optional[WatchlistRecord]:
        return next(
            (
                entry
                for entry in self.entries
                if entry.user_id == user_id and entry.watched_user_id == watched_user_id
            ),
            None,
        )

    def create_entry(self, user_id: str, watched_user_id: str) -> WatchlistRecord:
        record = WatchlistRecord(
            id=f"watch-{len(self.entries) + 1}",
            user_id=user_id,
            watched_user_id=watched_user_id,
            added_at=REFERENCE_NOW,
        )
        self.entries.append(record)
        return record

    def delete_entry(self, user_id: str, watched_user_id: str) -> bool:
        before = len(self.entries)
        self.entries = [
            entry
            for entry in self.entries
            if not (entry.user_id == user_id and entry.watched_user_id == watched_user_id)
        ]
        return len(self.entries) < before


@pytest.fixture()
def client() -> TestClient:
    get_settings.cache_clear()
    app = create_app()
    return TestClient(app)
