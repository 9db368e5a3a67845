from __future__ import annotations

from typing import Optional
from zoneinfo import ZoneInfo

from salesboard.analytics.aggregation import calculate_best_sales_counts
from salesboard.core.config import get_settings
from salesboard.core.errors import NotFoundError
from salesboard.models.sales import UserRecord
from salesboard.repositories.sales_repository import SalesRepository
from salesboard.repositories.users_repository import UsersRepository
from salesboard.schemas.users import Accolade, ProfileStats, UserProfile, UserProfileResponse


def resolve_user(users_repository: UsersRepository, user_id: Optional[str]) -> UserRecord:
    """Look up ``user_id``, falling back to the first user by name when omitted."""
    if user_id:
        user = users_repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
    user = users_repository.get_first_user()
    if not user:
        raise NotFoundError("No users found")
    return user


class UsersService:
    def __init__(self, users_repository: UsersRepository, sales_repository: SalesRepository) -> None:
        self.users_repository = users_repository
        self.sales_repository = sales_repository
        self.settings = get_settings()

    def get_profile(self, user_id: str) -> UserProfileResponse:
        user = self.users_repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        sales = self.sales_repository.list_sales(user_id=user.id)
        best = calculate_best_sales_counts(sales, ZoneInfo(self.settings.reporting_timezone))
        accolades = sorted(
            self.users_repository.list_accolades(user.id),
            key=lambda accolade: accolade.year,
            reverse=True,
        )
        return UserProfileResponse(
            user=UserProfile(
                id=user.id,
                name=user.name,
                email=user.email,
                tagline=user.tagline,
                profile_image=user.profile_image,
                phone=user.phone,
                team=user.team,
                region=user.region,
                joined_date=user.joined_date,
                is_active=user.is_active,
                last_active=user.last_active,
            ),
            stats=ProfileStats(
                best_day=best.best_day,
                best_quarter=best.best_quarter,
                best_year=best.best_year,
            ),
            accolades=[
                Accolade(id=accolade.id, title=accolade.title, year=accolade.year)
                for accolade in accolades
            ],
        )
