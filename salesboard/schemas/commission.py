from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from salesboard.shared.base import BaseSchema


class PayPeriod(BaseSchema):
    start: date
    end: date
    label: str


class CommissionSummary(BaseSchema):
    accounts_sold: int
    earned: int
    paid: int
    withheld: int


class CommissionTransaction(BaseSchema):
    id: Optional[str] = None
    date: date
    accounts_sold: int
    earned: int
    paid: int
    withheld: int
    is_paid: bool


class CommissionResponse(BaseSchema):
    summary: CommissionSummary
    pay_period: PayPeriod
    transactions: List[CommissionTransaction]


class WithholdingLimitSummary(BaseSchema):
    amount: int
    current: int
    remaining: int
    percentage: int


class WithholdingSummary(BaseSchema):
    accounts_sold: int
    withheld: int
    days: int


class WithholdingTransaction(BaseSchema):
    id: Optional[str] = None
    date: date
    accounts_sold: int
    withheld: int


class WithholdingResponse(BaseSchema):
    limit: WithholdingLimitSummary
    summary: WithholdingSummary
    pay_period: PayPeriod
    transactions: List[WithholdingTransaction]


class SaleDetail(BaseSchema):
    id: Optional[str] = None
    date: datetime
    revenue: float
    accounts_sold: int
    is_canceled: bool
    is_install: bool


class SalesDetailTotals(BaseSchema):
    count: int
    cancels: int
    revenue: float


class SalesDetailResponse(BaseSchema):
    day: date
    sales: List[SaleDetail]
    total: SalesDetailTotals
