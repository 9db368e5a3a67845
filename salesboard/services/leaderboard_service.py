from __future__ import annotations

from typing import Optional

from salesboard.analytics.aggregation import aggregate_sales_by_user
from salesboard.analytics.ranking import (
    RankingEntry,
    build_team_entries,
    build_user_entries,
    rank_by_sales,
)
from salesboard.core.config import get_settings
from salesboard.repositories.sales_repository import SalesRepository
from salesboard.repositories.users_repository import UsersRepository
from salesboard.schemas.leaderboard import LeaderboardFilters, LeaderboardResponse, LeaderboardRow
from salesboard.shared.time import reference_now, resolve_period

ALL_FILTER = "all"
RANK_TYPE_TEAM = "team"


class LeaderboardService:
    def __init__(self, users_repository: UsersRepository, sales_repository: SalesRepository) -> None:
        self.users_repository = users_repository
        self.sales_repository = sales_repository
        self.settings = get_settings()

    def get_leaderboard(self, filters: LeaderboardFilters) -> LeaderboardResponse:
        now = reference_now(self.settings)
        period = resolve_period(
            filters.period,
            now,
            normalize_to_midnight=True,
            custom_start=filters.start_date,
            custom_end=filters.end_date,
        )
        users = self.users_repository.list_users(
            region=self._optional_filter(filters.region),
            team_contains=self._optional_filter(filters.state),
        )
        user_ids = {user.id for user in users}
        sales = [
            sale
            for sale in self.sales_repository.list_sales(start=period.start, end=period.end)
            if sale.user_id in user_ids
        ]
        metrics_by_user = aggregate_sales_by_user(sales)
        if filters.rank_type == RANK_TYPE_TEAM:
            entries = build_team_entries(users, metrics_by_user)
        else:
            entries = build_user_entries(users, metrics_by_user)

        rankings = [
            self._to_row(entry, filters.rank_type) for entry in rank_by_sales(entries)
        ]
        return LeaderboardResponse(
            period_start=period.start,
            period_end=period.end,
            top_performer=rankings[0] if rankings else None,
            rankings=rankings,
            filters=filters,
        )

    @staticmethod
    def _optional_filter(value: Optional[str]) -> Optional[str]:
        if not value or value.strip().lower() == ALL_FILTER:
            return None
        return value.strip()

    @staticmethod
    def _to_row(entry: RankingEntry, rank_type: str) -> LeaderboardRow:
        return LeaderboardRow(
            rank=entry.rank,
            user_id=None if rank_type == RANK_TYPE_TEAM else entry.key,
            name=entry.name,
            team=entry.team,
            region=entry.region,
            sales=entry.metrics.sales,
            cancels=entry.metrics.cancels,
            revenue=float(entry.metrics.revenue),
            installs=entry.metrics.installs,
            member_count=entry.member_count,
        )
