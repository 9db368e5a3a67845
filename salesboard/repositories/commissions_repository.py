from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from salesboard.core.supabase import SupabaseClient
from salesboard.models.sales import CommissionRecord, WithholdingLimitRecord

COMMISSION_COLUMNS = (
    "id,user_id,date,accounts_sold,earned_amount,withheld_amount,paid_amount,"
    "pay_period_start,pay_period_end,is_paid"
)
WITHHOLDING_COLUMNS = "id,user_id,current_amount,limit_amount,reset_date,updated_at"
INSERT_BATCH_SIZE = 500


class CommissionsRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_commissions(
        self,
        user_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        user_ids: Optional[List[str]] = None,
    ) -> List[CommissionRecord]:
        filters: List[Tuple[str, str]] = []
        if user_id:
            filters.append(("user_id", f"eq.{user_id}"))
        if user_ids is not None:
            normalized_ids = sorted({value for value in user_ids if value})
            if not normalized_ids:
                return []
            filters.append(("user_id", f"in.({','.join(normalized_ids)})"))
        if start_date is not None:
            filters.append(("date", f"gte.{start_date.isoformat()}"))
        if end_date is not None:
            filters.append(("date", f"lte.{end_date.isoformat()}"))
        if limit is not None:
            rows = self.client.select(
                table="commissions",
                select=COMMISSION_COLUMNS,
                filters=filters,
                order="date.desc",
                limit=limit,
            )
        else:
            rows = self.client.select_all(
                table="commissions",
                select=COMMISSION_COLUMNS,
                filters=filters,
                order="date.desc,id.asc",
            )
        return [CommissionRecord.model_validate(row) for row in rows]

    def create_commissions(self, commissions: List[CommissionRecord]) -> int:
        payload = [row.model_dump(mode="json", exclude_none=True) for row in commissions]
        for start in range(0, len(payload), INSERT_BATCH_SIZE):
            self.client.insert(
                table="commissions",
                payload=payload[start : start + INSERT_BATCH_SIZE],
                returning=False,
            )
        return len(payload)

    def delete_all_commissions(self) -> None:
        self.client.delete(table="commissions", filters=[("id", "not.is.null")], returning=False)

    def get_withholding_limit(self, user_id: str) -> Optional[WithholdingLimitRecord]:
        rows = self.client.select(
            table="withholding_limits",
            select=WITHHOLDING_COLUMNS,
            filters=[("user_id", f"eq.{user_id}")],
            order="updated_at.desc.nullslast",
            limit=1,
        )
        return WithholdingLimitRecord.model_validate(rows[0]) if rows else None

    def create_withholding_limits(self, limits: List[WithholdingLimitRecord]) -> int:
        if not limits:
            return 0
        payload = [row.model_dump(mode="json", exclude_none=True) for row in limits]
        self.client.insert(table="withholding_limits", payload=payload, returning=False)
        return len(payload)

    def delete_all_withholding_limits(self) -> None:
        self.client.delete(table="withholding_limits", filters=[("id", "not.is.null")], returning=False)
