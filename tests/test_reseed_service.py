from __future__ import annotations

from datetime import date

import pytest

from conftest import (
    StubCommissionsRepository,
    StubSalesRepository,
    StubUsersRepository,
    make_sale,
    make_settings,
    make_user,
)

from salesboard.core.errors import InternalError, UnauthorizedError
from salesboard.services.reseed_service import ReseedService


class FailingSalesRepository(StubSalesRepository):
    def create_sales(self, sales):
        raise RuntimeError("insert rejected")


def _service(sales_repository=None, **settings) -> ReseedService:
    service = ReseedService(
        users_repository=StubUsersRepository([make_user("u1", "Alice"), make_user("u2", "Bob")]),
        sales_repository=sales_repository or StubSalesRepository(),
        commissions_repository=StubCommissionsRepository(),
    )
    service.settings = make_settings(**settings)
    return service


def test_reseed_regenerates_sales_and_commissions() -> None:
    service = _service()
    result = service.reseed("open-sesame")
    assert result.success is True
    assert result.stats.users == 2
    assert result.stats.sales == len(service.sales_repository.sales)
    assert result.stats.commissions == len(service.commissions_repository.commissions)
    assert result.stats.withholding_limits == 2
    limit = service.commissions_repository.limits["u1"]
    assert limit.reset_date == date(2026, 3, 1)
    assert limit.current_amount <= limit.limit_amount


def test_reseed_is_deterministic_for_reference_date() -> None:
    first = _service()
    second = _service()
    first.reseed("open-sesame")
    second.reseed("open-sesame")
    assert [sale.model_dump() for sale in first.sales_repository.sales] == [
        sale.model_dump() for sale in second.sales_repository.sales
    ]


def test_reseed_rejects_wrong_or_unconfigured_secret() -> None:
    with pytest.raises(UnauthorizedError):
        _service().reseed("wrong")
    with pytest.raises(UnauthorizedError):
        _service(reseed_secret=None).reseed("open-sesame")
    with pytest.raises(UnauthorizedError):
        _service().reseed(None)


def test_reseed_wraps_store_failures() -> None:
    sales_repository = FailingSalesRepository([make_sale("u1", make_settings().reporting_reference_date)])
    service = _service(sales_repository=sales_repository)
    with pytest.raises(InternalError) as excinfo:
        service.reseed("open-sesame")
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert sales_repository.deleted is True
