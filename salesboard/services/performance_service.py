from __future__ import annotations

import logging
from typing import Optional

from salesboard.analytics.aggregation import (
    aggregate_sales_by_user,
    calculate_sales_metrics,
    filter_sales_in_range,
    round_half_up,
)
from salesboard.analytics.ranking import build_user_entries, find_rank, rank_by_sales, top_rankings
from salesboard.analytics.trends import calculate_trend
from salesboard.core.config import get_settings
from salesboard.repositories.sales_repository import SalesRepository
from salesboard.repositories.users_repository import UsersRepository
from salesboard.schemas.performance import (
    PerformanceMetrics,
    PerformanceRanking,
    PerformanceResponse,
    PerformanceTrends,
    PerformanceUser,
    RankingSnapshotRow,
)
from salesboard.services.users_service import resolve_user
from salesboard.shared.time import reference_now, resolve_period, resolve_previous_period

logger = logging.getLogger(__name__)


class PerformanceService:
    def __init__(self, users_repository: UsersRepository, sales_repository: SalesRepository) -> None:
        self.users_repository = users_repository
        self.sales_repository = sales_repository
        self.settings = get_settings()

    def get_performance(self, user_id: Optional[str], period: str) -> PerformanceResponse:
        user = resolve_user(self.users_repository, user_id)
        now = reference_now(self.settings)
        current_range = resolve_period(period, now)
        previous_range = resolve_previous_period(period, now)
        logger.debug(
            "Performance windows for %s: current %s..%s, previous %s..%s",
            user.id,
            current_range.start.isoformat(),
            current_range.end.isoformat() if current_range.end else "now",
            previous_range.start.isoformat(),
            previous_range.end.isoformat() if previous_range.end else "now",
        )

        user_sales = self.sales_repository.list_sales(
            start=min(current_range.start, previous_range.start), user_id=user.id
        )
        current = calculate_sales_metrics(filter_sales_in_range(user_sales, current_range))
        previous = calculate_sales_metrics(filter_sales_in_range(user_sales, previous_range))

        all_users = self.users_repository.list_users()
        period_sales = self.sales_repository.list_sales(start=current_range.start, end=current_range.end)
        ranked = rank_by_sales(build_user_entries(all_users, aggregate_sales_by_user(period_sales)))
        top_performers = [
            RankingSnapshotRow(
                rank=entry.rank,
                user_id=entry.key,
                name=entry.name,
                team=entry.team,
                sales=entry.metrics.sales,
                cancels=entry.metrics.cancels,
            )
            for entry in top_rankings(ranked, self.settings.leaderboard_top_count)
        ]

        return PerformanceResponse(
            user=PerformanceUser(id=user.id, name=user.name, team=user.team, region=user.region),
            metrics=PerformanceMetrics(
                sales=current.sales,
                revenue=round_half_up(current.revenue),
                installs=current.installs,
                cancels=current.cancels,
            ),
            trends=PerformanceTrends(
                sales=calculate_trend(current.sales, previous.sales),
                revenue=calculate_trend(current.revenue, previous.revenue),
                installs=calculate_trend(current.installs, previous.installs),
                cancels=calculate_trend(current.cancels, previous.cancels),
            ),
            ranking=PerformanceRanking(
                current_rank=find_rank(ranked, user.id),
                top_performers=top_performers,
            ),
            period_start=current_range.start,
            period_end=current_range.end,
            previous_period_start=previous_range.start,
            previous_period_end=previous_range.end,
        )
