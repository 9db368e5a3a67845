from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from salesboard.analytics.aggregation import sale_day
from salesboard.models.sales import CommissionRecord, SaleRecord, WithholdingLimitRecord
from salesboard.shared.time import pay_period_bounds

ZERO = Decimal("0")


@dataclass(frozen=True)
class CommissionPolicy:
    commission_rate: Decimal
    withholding_rate: Decimal
    limit_amount: Decimal
    payable_after_days: int

    @classmethod
    def from_settings(cls, settings: Any) -> "CommissionPolicy":
        return cls(
            commission_rate=Decimal(str(settings.commission_rate)),
            withholding_rate=Decimal(str(settings.withholding_rate)),
            limit_amount=Decimal(str(settings.withholding_limit_amount)),
            payable_after_days=int(settings.commission_payable_after_days),
        )


def derive_daily_commissions(
    sales: Iterable[SaleRecord],
    now: datetime,
    policy: CommissionPolicy,
    tz: Optional[tzinfo] = None,
) -> List[CommissionRecord]:
    """One commission row per (user, calendar day) that has any sale.

    Canceled sales still open the day but contribute nothing to the amounts.
    """
    grouped: Dict[Tuple[str, date], List[SaleRecord]] = defaultdict(list)
    for sale in sales:
        grouped[(sale.user_id, sale_day(sale, tz))].append(sale)

    payable_cutoff = now - timedelta(days=policy.payable_after_days)
    commissions: List[CommissionRecord] = []
    for (user_id, day), day_sales in grouped.items():
        counted = [sale for sale in day_sales if not sale.is_canceled]
        revenue = sum((sale.revenue for sale in counted), ZERO)
        earned = revenue * policy.commission_rate
        withheld = earned * policy.withholding_rate
        period_start, period_end = pay_period_bounds(day)
        commissions.append(
            CommissionRecord(
                user_id=user_id,
                date=day,
                accounts_sold=sum(sale.accounts_sold for sale in counted),
                earned_amount=earned,
                withheld_amount=withheld,
                paid_amount=earned - withheld,
                pay_period_start=period_start,
                pay_period_end=period_end,
                is_paid=datetime.combine(day, time.min, tzinfo=now.tzinfo) < payable_cutoff,
            )
        )
    return commissions


def cap_withholding(total_withheld: Decimal, limit_amount: Decimal) -> Decimal:
    return min(total_withheld, limit_amount)


def derive_withholding_limits(
    commissions: Iterable[CommissionRecord],
    user_ids: Iterable[str],
    policy: CommissionPolicy,
    reset_date: date,
) -> List[WithholdingLimitRecord]:
    withheld_by_user: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for commission in commissions:
        withheld_by_user[commission.user_id] += commission.withheld_amount
    return [
        WithholdingLimitRecord(
            user_id=user_id,
            current_amount=cap_withholding(withheld_by_user[user_id], policy.limit_amount),
            limit_amount=policy.limit_amount,
            reset_date=reset_date,
        )
        for user_id in user_ids
    ]
