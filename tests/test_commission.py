from __future__ import annotations

import random
from datetime import date, datetime, timezone
from decimal import Decimal

from conftest import make_sale, make_settings, make_user

from salesboard.analytics.commission import (
    CommissionPolicy,
    derive_daily_commissions,
    derive_withholding_limits,
)
from salesboard.analytics.sales_generator import DEMO_WEEK_DAY, REGULAR_DAY, generate_sales, volume_profile_for

NOW = datetime(2026, 1, 20, 12, 0, tzinfo=timezone.utc)
POLICY = CommissionPolicy.from_settings(make_settings())


def test_daily_commission_excludes_canceled_revenue() -> None:
    day = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)
    [row] = derive_daily_commissions(
        [
            make_sale("u1", day, revenue=100),
            make_sale("u1", day, revenue=50),
            make_sale("u1", day, revenue=0, is_canceled=True),
        ],
        NOW,
        POLICY,
    )
    assert row.accounts_sold == 2
    assert row.earned_amount == Decimal("37.5")
    assert row.withheld_amount == Decimal("7.5")
    assert row.paid_amount == Decimal("30")
    assert row.pay_period_start == date(2026, 1, 1)
    assert row.pay_period_end == date(2026, 1, 31)
    assert row.is_paid is True


def test_fully_canceled_day_still_gets_zero_row() -> None:
    day = datetime(2026, 1, 18, 9, 0, tzinfo=timezone.utc)
    [row] = derive_daily_commissions([make_sale("u1", day, is_canceled=True)], NOW, POLICY)
    assert row.accounts_sold == 0
    assert row.earned_amount == Decimal("0")
    assert row.is_paid is False


def test_withholding_current_is_capped_at_limit() -> None:
    big_day = datetime(2026, 1, 2, 9, 0, tzinfo=timezone.utc)
    commissions = derive_daily_commissions(
        [make_sale("u1", big_day, revenue=70000), make_sale("u2", big_day, revenue=400)],
        NOW,
        POLICY,
    )
    limits = derive_withholding_limits(commissions, ["u1", "u2", "u3"], POLICY, reset_date=date(2026, 3, 1))
    by_user = {limit.user_id: limit for limit in limits}
    assert by_user["u1"].current_amount == Decimal("3000")
    assert by_user["u2"].current_amount == Decimal("20")
    assert by_user["u3"].current_amount == Decimal("0")
    assert all(limit.reset_date == date(2026, 3, 1) for limit in limits)


def test_generator_is_deterministic_and_respects_bounds() -> None:
    users = [make_user("u1", "Alice"), make_user("u2", "Bob")]
    first = generate_sales(users, NOW, random.Random("2026:2026-01-20"))
    second = generate_sales(users, NOW, random.Random("2026:2026-01-20"))
    assert [sale.model_dump() for sale in first] == [sale.model_dump() for sale in second]
    assert min(sale.date for sale in first).date() >= date(2025, 12, 1)
    assert max(sale.date for sale in first).date() <= date(2026, 1, 20)
    assert all(8 <= sale.date.hour <= 18 for sale in first)
    assert all(Decimal("30") <= sale.revenue <= Decimal("150") for sale in first)
    assert not any(sale.is_canceled and sale.is_install for sale in first)


def test_demo_week_uses_higher_volume_profile() -> None:
    assert volume_profile_for(date(2026, 1, 18)) is DEMO_WEEK_DAY
    assert volume_profile_for(date(2026, 1, 25)) is REGULAR_DAY
