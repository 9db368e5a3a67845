from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Header, Query

from salesboard.repositories.commissions_repository import CommissionsRepository
from salesboard.repositories.sales_repository import SalesRepository
from salesboard.repositories.users_repository import UsersRepository
from salesboard.repositories.watchlist_repository import WatchlistRepository
from salesboard.services.commission_service import CommissionService
from salesboard.services.leaderboard_service import LeaderboardService
from salesboard.services.performance_service import PerformanceService
from salesboard.services.reseed_service import ReseedService
from salesboard.services.users_service import UsersService
from salesboard.services.watchlist_service import WatchlistService


@lru_cache
def get_users_repository() -> UsersRepository:
    return UsersRepository()


@lru_cache
def get_sales_repository() -> SalesRepository:
    return SalesRepository()


@lru_cache
def get_commissions_repository() -> CommissionsRepository:
    return CommissionsRepository()


@lru_cache
def get_watchlist_repository() -> WatchlistRepository:
    return WatchlistRepository()


def get_leaderboard_service() -> LeaderboardService:
    return LeaderboardService(
        users_repository=get_users_repository(),
        sales_repository=get_sales_repository(),
    )


def get_performance_service() -> PerformanceService:
    return PerformanceService(
        users_repository=get_users_repository(),
        sales_repository=get_sales_repository(),
    )


def get_commission_service() -> CommissionService:
    return CommissionService(
        users_repository=get_users_repository(),
        sales_repository=get_sales_repository(),
        commissions_repository=get_commissions_repository(),
    )


def get_users_service() -> UsersService:
    return UsersService(
        users_repository=get_users_repository(),
        sales_repository=get_sales_repository(),
    )


def get_watchlist_service() -> WatchlistService:
    return WatchlistService(
        users_repository=get_users_repository(),
        sales_repository=get_sales_repository(),
        commissions_repository=get_commissions_repository(),
        watchlist_repository=get_watchlist_repository(),
    )


def get_reseed_service() -> ReseedService:
    return ReseedService(
        users_repository=get_users_repository(),
        sales_repository=get_sales_repository(),
        commissions_repository=get_commissions_repository(),
    )


def get_request_user_id(
    user_id: Optional[str] = Query(default=None),
    x_user_id: Optional[str] = Header(default=None),
) -> Optional[str]:
    """Acting user for the request; the query parameter wins over the header."""
    return user_id or x_user_id or None
