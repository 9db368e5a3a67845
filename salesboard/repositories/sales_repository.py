from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from salesboard.core.supabase import SupabaseClient
from salesboard.models.sales import SaleRecord

SALE_COLUMNS = "id,user_id,date,revenue,accounts_sold,is_canceled,is_install"
INSERT_BATCH_SIZE = 500


class SalesRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[str] = None,
        user_ids: Optional[List[str]] = None,
    ) -> List[SaleRecord]:
        filters: List[Tuple[str, str]] = []
        if start is not None:
            filters.append(("date", f"gte.{start.isoformat()}"))
        if end is not None:
            filters.append(("date", f"lte.{end.isoformat()}"))
        if user_id:
            filters.append(("user_id", f"eq.{user_id}"))
        if user_ids is not None:
            normalized_ids = sorted({value for value in user_ids if value})
            if not normalized_ids:
                return []
            filters.append(("user_id", f"in.({','.join(normalized_ids)})"))
        rows = self.client.select_all(
            table="sales",
            select=SALE_COLUMNS,
            filters=filters,
            order="date.desc,id.asc",
        )
        return [SaleRecord.model_validate(row) for row in rows]

    def create_sales(self, sales: List[SaleRecord]) -> int:
        payload = [sale.model_dump(mode="json", exclude_none=True) for sale in sales]
        for start in range(0, len(payload), INSERT_BATCH_SIZE):
            self.client.insert(
                table="sales",
                payload=payload[start : start + INSERT_BATCH_SIZE],
                returning=False,
            )
        return len(payload)

    def delete_all_sales(self) -> None:
        self.client.delete(table="sales", filters=[("id", "not.is.null")], returning=False)
