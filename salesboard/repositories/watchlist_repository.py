from __future__ import annotations

from typing import List, Optional

import httpx

from salesboard.core.errors import ConflictError
from salesboard.core.supabase import SupabaseClient
from salesboard.models.sales import WatchlistRecord

WATCHLIST_COLUMNS = "id,user_id,watched_user_id,added_at"


class WatchlistRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_entries(self, user_id: str) -> List[WatchlistRecord]:
        rows = self.client.select_all(
            table="watchlist",
            select=WATCHLIST_COLUMNS,
            filters=[("user_id", f"eq.{user_id}")],
            order="added_at.desc",
        )
        return [WatchlistRecord.model_validate(row) for row in rows]

    def get_entry(self, user_id: str, watched_user_id: str) -> Optional[WatchlistRecord]:
        rows = self.client.select(
            table="watchlist",
            select=WATCHLIST_COLUMNS,
            filters=[("user_id", f"eq.{user_id}"), ("watched_user_id", f"eq.{watched_user_id}")],
            limit=1,
        )
        return WatchlistRecord.model_validate(rows[0]) if rows else None

    def create_entry(self, user_id: str, watched_user_id: str) -> WatchlistRecord:
        try:
            rows = self.client.insert(
                table="watchlist",
                payload={"user_id": user_id, "watched_user_id": watched_user_id},
            )
        except httpx.HTTPStatusError as exc:
            # Unique (user_id, watched_user_id) constraint lost a race with another insert.
            if exc.response.status_code == 409:
                raise ConflictError("User already on watchlist") from exc
            raise
        if rows:
            return WatchlistRecord.model_validate(rows[0])
        return WatchlistRecord(user_id=user_id, watched_user_id=watched_user_id)

    def delete_entry(self, user_id: str, watched_user_id: str) -> bool:
        rows = self.client.delete(
            table="watchlist",
            filters=[("user_id", f"eq.{user_id}"), ("watched_user_id", f"eq.{watched_user_id}")],
        )
        return bool(rows)
