from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import StubSalesRepository, StubUsersRepository, make_sale, make_settings, make_user

from salesboard.core.errors import NotFoundError
from salesboard.models.sales import SaleRecord
from salesboard.services.performance_service import PerformanceService

TODAY = datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc)
YESTERDAY = datetime(2026, 1, 14, 9, 0, tzinfo=timezone.utc)


def _service(users=None, sales=None) -> PerformanceService:
    users_repository = StubUsersRepository(
        users
        if users is not None
        else [make_user("u2", "Bob"), make_user("u1", "Alice"), make_user("u3", "Cara")]
    )
    sales_repository = StubSalesRepository(
        sales
        if sales is not None
        else [make_sale("u1", TODAY, is_install=True) for _ in range(3)]
        + [make_sale("u1", YESTERDAY) for _ in range(2)]
        + [make_sale("u2", TODAY) for _ in range(4)]
    )
    service = PerformanceService(users_repository=users_repository, sales_repository=sales_repository)
    service.settings = make_settings()
    return service


def test_performance_compares_against_previous_day() -> None:
    result = _service().get_performance("u1", "today")
    assert result.metrics.sales == 3
    assert result.metrics.revenue == 300
    assert result.metrics.installs == 3
    assert result.trends.sales == 50
    assert result.trends.revenue == 50
    assert result.trends.installs == 100
    assert result.trends.cancels == 0
    assert result.previous_period_start == datetime(2026, 1, 14, tzinfo=timezone.utc)


def test_performance_ranking_snapshot() -> None:
    result = _service().get_performance("u1", "today")
    assert result.ranking.current_rank == 2
    assert [row.user_id for row in result.ranking.top_performers] == ["u2", "u1", "u3"]
    assert [row.rank for row in result.ranking.top_performers] == [1, 2, 3]


def test_missing_user_id_defaults_to_first_user_by_name() -> None:
    result = _service().get_performance(None, "today")
    assert result.user.id == "u1"


def test_unknown_user_is_not_found() -> None:
    with pytest.raises(NotFoundError):
        _service().get_performance("ghost", "today")


def test_no_users_is_not_found() -> None:
    with pytest.raises(NotFoundError):
        _service(users=[], sales=[]).get_performance(None, "today")


def test_week_window_keeps_time_of_day() -> None:
    result = _service().get_performance("u1", "week")
    assert result.period_start == datetime(2026, 1, 8, 12, 0, tzinfo=timezone.utc)
    assert result.previous_period_start == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_store_rows_without_timezone_are_read_as_utc() -> None:
    row = SaleRecord.model_validate(
        {
            "id": "s1",
            "user_id": "u1",
            "date": "2026-01-15T10:00:00",
            "revenue": "120",
            "accounts_sold": 1,
            "is_canceled": False,
            "is_install": True,
        }
    )
    assert row.date == datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc)
    result = _service(sales=[row]).get_performance("u1", "today")
    assert result.metrics.sales == 1
    assert result.metrics.revenue == 120
    assert result.ranking.current_rank == 1
