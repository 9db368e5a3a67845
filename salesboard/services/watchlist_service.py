from __future__ import annotations

from collections import defaultdict
from datetime import timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from salesboard.analytics.aggregation import (
    aggregate_sales_by_user,
    calculate_sales_metrics,
    count_sales_by_day,
    filter_sales_in_range,
)
from salesboard.analytics.milestones import calculate_sales_streak, detect_milestones
from salesboard.analytics.ranking import build_user_entries, find_rank, rank_by_sales
from salesboard.core.config import get_settings
from salesboard.core.errors import ConflictError, NotFoundError, ValidationError
from salesboard.models.sales import SaleRecord, UserRecord, WatchlistRecord
from salesboard.repositories.commissions_repository import CommissionsRepository
from salesboard.repositories.sales_repository import SalesRepository
from salesboard.repositories.users_repository import UsersRepository
from salesboard.repositories.watchlist_repository import WatchlistRepository
from salesboard.schemas.watchlist import (
    WatchedUser,
    WatchlistAddRequest,
    WatchlistEntry,
    WatchlistItem,
    WatchlistMilestone,
    WatchlistMutationResult,
    WatchlistResponse,
    WatchlistStats,
)
from salesboard.shared.time import DateRange, reference_now, start_of_day

STREAK_LOOKBACK_DAYS = 30


class WatchlistService:
    def __init__(
        self,
        users_repository: UsersRepository,
        sales_repository: SalesRepository,
        commissions_repository: CommissionsRepository,
        watchlist_repository: WatchlistRepository,
    ) -> None:
        self.users_repository = users_repository
        self.sales_repository = sales_repository
        self.commissions_repository = commissions_repository
        self.watchlist_repository = watchlist_repository
        self.settings = get_settings()

    def list_watchlist(self, user_id: Optional[str]) -> WatchlistResponse:
        if not user_id:
            raise ValidationError("user_id is required")
        entries = sorted(
            self.watchlist_repository.list_entries(user_id),
            key=lambda entry: entry.added_at.timestamp() if entry.added_at else 0.0,
            reverse=True,
        )
        if not entries:
            return WatchlistResponse(watchlist=[], count=0, milestone_count=0)

        watched_ids = [entry.watched_user_id for entry in entries]
        users_by_id = {user.id: user for user in self.users_repository.list_users_by_ids(watched_ids)}

        now = reference_now(self.settings)
        today = DateRange(start=start_of_day(now))
        recent_sales = self.sales_repository.list_sales(
            start=today.start - timedelta(days=STREAK_LOOKBACK_DAYS - 1), user_ids=watched_ids
        )
        sales_by_user: Dict[str, List[SaleRecord]] = defaultdict(list)
        for sale in recent_sales:
            sales_by_user[sale.user_id].append(sale)

        commission_by_user: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        for commission in self.commissions_repository.list_commissions(
            user_ids=watched_ids, start_date=today.start.date()
        ):
            commission_by_user[commission.user_id] += commission.earned_amount

        ranked = rank_by_sales(
            build_user_entries(
                self.users_repository.list_users(),
                aggregate_sales_by_user(self.sales_repository.list_sales(start=today.start)),
            )
        )

        items: List[WatchlistItem] = []
        for entry in entries:
            user = users_by_id.get(entry.watched_user_id)
            if user is None:
                continue
            user_sales = sales_by_user.get(user.id, [])
            today_metrics = calculate_sales_metrics(filter_sales_in_range(user_sales, today))
            streak = calculate_sales_streak(count_sales_by_day(user_sales, now.tzinfo), now.date())
            rank = find_rank(ranked, user.id)
            # Everyone ties at zero before the first sale; no rank badge for that.
            milestones = detect_milestones(
                user.id,
                user.name,
                rank=rank if today_metrics.sales > 0 else None,
                today_sales=today_metrics.sales,
                streak=streak,
            )
            items.append(
                WatchlistItem(
                    id=entry.id,
                    user_id=user.id,
                    name=user.name,
                    team=user.team,
                    region=user.region,
                    profile_image=user.profile_image,
                    tagline=user.tagline,
                    added_at=entry.added_at,
                    stats=WatchlistStats(
                        today_sales=today_metrics.sales,
                        today_revenue=float(today_metrics.revenue),
                        today_commission=float(commission_by_user[user.id]),
                        rank=rank,
                        streak=streak,
                    ),
                    milestones=[
                        WatchlistMilestone(type=milestone.type, message=milestone.message)
                        for milestone in milestones
                    ],
                )
            )
        return WatchlistResponse(
            watchlist=items,
            count=len(items),
            milestone_count=sum(1 for item in items if item.milestones),
        )

    def add(self, request: WatchlistAddRequest) -> WatchlistMutationResult:
        if not request.user_id or not request.watched_user_id:
            raise ValidationError("userId and watchedUserId are required")
        if request.user_id == request.watched_user_id:
            raise ValidationError("Cannot add yourself to watchlist")
        if not self.users_repository.get_user(request.user_id):
            raise NotFoundError("User not found")
        watched_user = self.users_repository.get_user(request.watched_user_id)
        if not watched_user:
            raise NotFoundError("Watched user not found")
        if self.watchlist_repository.get_entry(request.user_id, request.watched_user_id):
            raise ConflictError("User already on watchlist")

        record = self.watchlist_repository.create_entry(request.user_id, request.watched_user_id)
        return WatchlistMutationResult(
            success=True,
            message=f"{watched_user.name} added to watchlist",
            entry=self._to_entry(record, watched_user),
        )

    def remove(self, user_id: Optional[str], watched_user_id: Optional[str]) -> WatchlistMutationResult:
        if not user_id or not watched_user_id:
            raise ValidationError("user_id and watched_user_id are required")
        if not self.watchlist_repository.delete_entry(user_id, watched_user_id):
            raise NotFoundError("Watchlist entry not found")
        return WatchlistMutationResult(success=True, message="Removed from watchlist")

    @staticmethod
    def _to_entry(record: WatchlistRecord, watched_user: UserRecord) -> WatchlistEntry:
        return WatchlistEntry(
            id=record.id,
            user_id=record.user_id,
            watched_user_id=record.watched_user_id,
            added_at=record.added_at,
            watched_user=WatchedUser(
                id=watched_user.id,
                name=watched_user.name,
                team=watched_user.team,
                region=watched_user.region,
            ),
        )
