from __future__ import annotations

from typing import List, Optional, Tuple

from salesboard.core.supabase import SupabaseClient
from salesboard.models.sales import AccoladeRecord, UserRecord

USER_COLUMNS = (
    "id,email,name,tagline,profile_image,phone,team,region,joined_date,is_active,last_active"
)


class UsersRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        rows = self.client.select(
            table="users",
            select=USER_COLUMNS,
            filters=[("id", f"eq.{user_id}")],
            limit=1,
        )
        return UserRecord.model_validate(rows[0]) if rows else None

    def get_first_user(self) -> Optional[UserRecord]:
        rows = self.client.select(
            table="users",
            select=USER_COLUMNS,
            order="name.asc",
            limit=1,
        )
        return UserRecord.model_validate(rows[0]) if rows else None

    def list_users(
        self, region: Optional[str] = None, team_contains: Optional[str] = None
    ) -> List[UserRecord]:
        filters: List[Tuple[str, str]] = []
        if region:
            filters.append(("region", f"eq.{region}"))
        if team_contains:
            filters.append(("team", f"like.*{team_contains}*"))
        rows = self.client.select_all(
            table="users",
            select=USER_COLUMNS,
            filters=filters,
            order="name.asc,id.asc",
        )
        return [UserRecord.model_validate(row) for row in rows]

    def list_users_by_ids(self, user_ids: List[str]) -> List[UserRecord]:
        normalized_ids = sorted({user_id for user_id in user_ids if user_id})
        if not normalized_ids:
            return []
        rows = self.client.select_all(
            table="users",
            select=USER_COLUMNS,
            filters=[("id", f"in.({','.join(normalized_ids)})")],
            order="name.asc,id.asc",
        )
        return [UserRecord.model_validate(row) for row in rows]

    def list_accolades(self, user_id: str) -> List[AccoladeRecord]:
        rows = self.client.select(
            table="accolades",
            select="id,user_id,title,year",
            filters=[("user_id", f"eq.{user_id}")],
            order="year.desc",
        )
        return [AccoladeRecord.model_validate(row) for row in rows]
