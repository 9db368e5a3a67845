from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, tzinfo
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from salesboard.models.sales import CommissionRecord, SaleRecord
from salesboard.shared.time import DateRange


@dataclass
class SalesMetrics:
    sales: int = 0
    cancels: int = 0
    revenue: Decimal = Decimal("0")
    installs: int = 0


@dataclass
class CommissionTotals:
    accounts_sold: int = 0
    earned: Decimal = Decimal("0")
    paid: Decimal = Decimal("0")
    withheld: Decimal = Decimal("0")


@dataclass
class BestSalesCounts:
    best_day: int = 0
    best_quarter: int = 0
    best_year: int = 0


def round_half_up(value: Decimal | float | int) -> int:
    """Nearest integer, halves rounded toward positive infinity."""
    return int(math.floor(float(value) + 0.5))


def filter_sales_in_range(sales: Iterable[SaleRecord], date_range: DateRange) -> List[SaleRecord]:
    return [sale for sale in sales if date_range.contains(sale.date)]


def calculate_sales_metrics(sales: Iterable[SaleRecord]) -> SalesMetrics:
    metrics = SalesMetrics()
    for sale in sales:
        if sale.is_canceled:
            metrics.cancels += 1
            continue
        metrics.sales += 1
        metrics.revenue += sale.revenue
        if sale.is_install:
            metrics.installs += 1
    return metrics


def aggregate_sales_by_user(sales: Iterable[SaleRecord]) -> Dict[str, SalesMetrics]:
    grouped: Dict[str, List[SaleRecord]] = defaultdict(list)
    for sale in sales:
        grouped[sale.user_id].append(sale)
    return {user_id: calculate_sales_metrics(rows) for user_id, rows in grouped.items()}


def summarize_commissions(commissions: Iterable[CommissionRecord]) -> CommissionTotals:
    totals = CommissionTotals()
    for commission in commissions:
        totals.accounts_sold += commission.accounts_sold
        totals.earned += commission.earned_amount
        totals.paid += commission.paid_amount
        totals.withheld += commission.withheld_amount
    return totals


def sale_day(sale: SaleRecord, tz: Optional[tzinfo] = None) -> date:
    if tz is not None and sale.date.tzinfo is not None:
        return sale.date.astimezone(tz).date()
    return sale.date.date()


def count_sales_by_day(sales: Iterable[SaleRecord], tz: Optional[tzinfo] = None) -> Dict[date, int]:
    counts: Dict[date, int] = defaultdict(int)
    for sale in sales:
        if not sale.is_canceled:
            counts[sale_day(sale, tz)] += 1
    return dict(counts)


def calculate_best_sales_counts(
    sales: Iterable[SaleRecord], tz: Optional[tzinfo] = None
) -> BestSalesCounts:
    by_day = count_sales_by_day(sales, tz)
    by_quarter: Dict[tuple[int, int], int] = defaultdict(int)
    by_year: Dict[int, int] = defaultdict(int)
    for day, count in by_day.items():
        by_quarter[(day.year, (day.month - 1) // 3 + 1)] += count
        by_year[day.year] += count
    return BestSalesCounts(
        best_day=max(by_day.values(), default=0),
        best_quarter=max(by_quarter.values(), default=0),
        best_year=max(by_year.values(), default=0),
    )
