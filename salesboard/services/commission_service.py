from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from salesboard.analytics.aggregation import calculate_sales_metrics, round_half_up, summarize_commissions
from salesboard.core.config import get_settings
from salesboard.core.errors import ValidationError
from salesboard.models.sales import CommissionRecord
from salesboard.repositories.commissions_repository import CommissionsRepository
from salesboard.repositories.sales_repository import SalesRepository
from salesboard.repositories.users_repository import UsersRepository
from salesboard.schemas.commission import (
    CommissionResponse,
    CommissionSummary,
    CommissionTransaction,
    PayPeriod,
    SaleDetail,
    SalesDetailResponse,
    SalesDetailTotals,
    WithholdingLimitSummary,
    WithholdingResponse,
    WithholdingSummary,
    WithholdingTransaction,
)
from salesboard.services.users_service import resolve_user
from salesboard.shared.time import (
    PERIOD_CUSTOM,
    PERIOD_MONTH,
    PERIOD_PAY_PERIOD,
    PERIOD_PREV_PAY_PERIOD,
    PERIOD_QUARTER,
    PERIOD_TODAY,
    PERIOD_WEEK,
    PERIOD_YEAR,
    day_bounds,
    month_start,
    normalize_period,
    pay_period_bounds,
    reference_now,
    resolve_period,
)

PERIOD_LABELS = {
    PERIOD_TODAY: "Today",
    PERIOD_WEEK: "Last 7 Days",
    PERIOD_MONTH: "Last Month",
    PERIOD_QUARTER: "Last Quarter",
    PERIOD_YEAR: "Last Year",
    PERIOD_PAY_PERIOD: "This Pay Period",
    PERIOD_PREV_PAY_PERIOD: "Previous Pay Period",
    PERIOD_CUSTOM: "Custom Range",
}


class CommissionService:
    def __init__(
        self,
        users_repository: UsersRepository,
        sales_repository: SalesRepository,
        commissions_repository: CommissionsRepository,
    ) -> None:
        self.users_repository = users_repository
        self.sales_repository = sales_repository
        self.commissions_repository = commissions_repository
        self.settings = get_settings()

    def get_commission(
        self,
        user_id: Optional[str],
        period: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> CommissionResponse:
        user = resolve_user(self.users_repository, user_id)
        commissions, pay_period = self._load_commissions(user.id, period, start_date, end_date)
        totals = summarize_commissions(commissions)
        return CommissionResponse(
            summary=CommissionSummary(
                accounts_sold=totals.accounts_sold,
                earned=round_half_up(totals.earned),
                paid=round_half_up(totals.paid),
                withheld=round_half_up(totals.withheld),
            ),
            pay_period=pay_period,
            transactions=[
                CommissionTransaction(
                    id=commission.id,
                    date=commission.date,
                    accounts_sold=commission.accounts_sold,
                    earned=round_half_up(commission.earned_amount),
                    paid=round_half_up(commission.paid_amount),
                    withheld=round_half_up(commission.withheld_amount),
                    is_paid=commission.is_paid,
                )
                for commission in commissions
            ],
        )

    def get_withholding(
        self,
        user_id: Optional[str],
        period: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> WithholdingResponse:
        user = resolve_user(self.users_repository, user_id)
        commissions, pay_period = self._load_commissions(user.id, period, start_date, end_date)
        limit = self.commissions_repository.get_withholding_limit(user.id)
        limit_amount = limit.limit_amount if limit else Decimal(str(self.settings.withholding_limit_amount))
        current_amount = limit.current_amount if limit else Decimal("0")
        percentage = round_half_up(current_amount / limit_amount * 100) if limit_amount else 0
        totals = summarize_commissions(commissions)
        return WithholdingResponse(
            limit=WithholdingLimitSummary(
                amount=round_half_up(limit_amount),
                current=round_half_up(current_amount),
                remaining=round_half_up(limit_amount - current_amount),
                percentage=percentage,
            ),
            summary=WithholdingSummary(
                accounts_sold=totals.accounts_sold,
                withheld=round_half_up(totals.withheld),
                days=len(commissions),
            ),
            pay_period=pay_period,
            transactions=[
                WithholdingTransaction(
                    id=commission.id,
                    date=commission.date,
                    accounts_sold=commission.accounts_sold,
                    withheld=round_half_up(commission.withheld_amount),
                )
                for commission in commissions
            ],
        )

    def get_sales_detail(self, user_id: Optional[str], day: Optional[date]) -> SalesDetailResponse:
        if not user_id or day is None:
            raise ValidationError("user_id and date are required")
        user = resolve_user(self.users_repository, user_id)
        now = reference_now(self.settings)
        bounds = day_bounds(day, now.tzinfo)
        sales = sorted(
            self.sales_repository.list_sales(start=bounds.start, end=bounds.end, user_id=user.id),
            key=lambda sale: sale.date,
            reverse=True,
        )
        metrics = calculate_sales_metrics(sales)
        return SalesDetailResponse(
            day=day,
            sales=[
                SaleDetail(
                    id=sale.id,
                    date=sale.date,
                    revenue=float(sale.revenue),
                    accounts_sold=sale.accounts_sold,
                    is_canceled=sale.is_canceled,
                    is_install=sale.is_install,
                )
                for sale in sales
            ],
            total=SalesDetailTotals(
                count=metrics.sales,
                cancels=metrics.cancels,
                revenue=float(metrics.revenue),
            ),
        )

    def _load_commissions(
        self,
        user_id: str,
        period: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Tuple[List[CommissionRecord], PayPeriod]:
        now = reference_now(self.settings)
        if not period:
            commissions = self.commissions_repository.list_commissions(
                user_id=user_id, limit=self.settings.commission_recent_limit
            )
            start, end = pay_period_bounds(now.date())
            return commissions, PayPeriod(start=start, end=end, label=PERIOD_LABELS[PERIOD_PAY_PERIOD])

        token = normalize_period(period)
        date_range = resolve_period(token, now, custom_start=start_date, custom_end=end_date)
        range_end = date_range.end.date() if date_range.end else None
        commissions = self.commissions_repository.list_commissions(
            user_id=user_id,
            start_date=date_range.start.date(),
            end_date=range_end,
        )
        return commissions, self._pay_period_for(token, now, date_range.start.date(), range_end)

    @staticmethod
    def _pay_period_for(
        token: str, now: datetime, start: date, end: Optional[date]
    ) -> PayPeriod:
        label = PERIOD_LABELS[token]
        if token == PERIOD_PAY_PERIOD:
            period_start, period_end = pay_period_bounds(now.date())
            return PayPeriod(start=period_start, end=period_end, label=label)
        if token == PERIOD_PREV_PAY_PERIOD:
            previous_month = month_start(now, -1).date()
            period_start, period_end = pay_period_bounds(previous_month)
            return PayPeriod(start=period_start, end=period_end, label=label)
        return PayPeriod(start=start, end=end or now.date(), label=label)
