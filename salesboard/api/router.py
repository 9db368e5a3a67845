from __future__ import annotations

from fastapi import APIRouter

from salesboard.api.admin import router as admin_router
from salesboard.api.commission import router as commission_router
from salesboard.api.health import router as health_router
from salesboard.api.leaderboard import router as leaderboard_router
from salesboard.api.performance import router as performance_router
from salesboard.api.users import router as users_router
from salesboard.api.watchlist import router as watchlist_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(leaderboard_router)
api_router.include_router(performance_router)
api_router.include_router(commission_router)
api_router.include_router(users_router)
api_router.include_router(watchlist_router)
api_router.include_router(admin_router)
