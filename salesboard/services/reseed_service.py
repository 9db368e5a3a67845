from __future__ import annotations

import logging
import random
import secrets
from typing import Optional

from salesboard.analytics.commission import (
    CommissionPolicy,
    derive_daily_commissions,
    derive_withholding_limits,
)
from salesboard.analytics.sales_generator import generate_sales
from salesboard.core.config import get_settings
from salesboard.core.errors import InternalError, UnauthorizedError
from salesboard.repositories.commissions_repository import CommissionsRepository
from salesboard.repositories.sales_repository import SalesRepository
from salesboard.repositories.users_repository import UsersRepository
from salesboard.schemas.admin import ReseedResult, ReseedStats
from salesboard.shared.time import month_start, reference_now

logger = logging.getLogger(__name__)


class ReseedService:
    """Wipes and regenerates the demo sales history for every existing user.

    There is no transaction around the steps: a failure part way through
    leaves the tables in whatever state the last completed step produced.
    """

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

    def authorize(self, password: Optional[str]) -> None:
        expected = self.settings.reseed_secret
        if not expected or not password:
            raise UnauthorizedError("Unauthorized")
        if not secrets.compare_digest(password.encode("utf-8"), expected.encode("utf-8")):
            raise UnauthorizedError("Unauthorized")

    def reseed(self, password: Optional[str]) -> ReseedResult:
        self.authorize(password)
        now = reference_now(self.settings)
        rng = random.Random(f"{self.settings.reseed_random_seed}:{now.date().isoformat()}")
        policy = CommissionPolicy.from_settings(self.settings)

        try:
            logger.info("Reseed started for reference date %s", now.date().isoformat())
            self.sales_repository.delete_all_sales()
            self.commissions_repository.delete_all_commissions()
            self.commissions_repository.delete_all_withholding_limits()
            logger.info("Cleared sales, commissions and withholding limits")

            users = self.users_repository.list_users()
            sales = generate_sales(users, now, rng)
            sales_count = self.sales_repository.create_sales(sales)
            logger.info("Inserted %s sales for %s users", sales_count, len(users))

            commissions = derive_daily_commissions(sales, now, policy, tz=now.tzinfo)
            commissions_count = self.commissions_repository.create_commissions(commissions)
            logger.info("Inserted %s commission rows", commissions_count)

            limits = derive_withholding_limits(
                commissions,
                [user.id for user in users],
                policy,
                reset_date=month_start(now, 2).date(),
            )
            limits_count = self.commissions_repository.create_withholding_limits(limits)
            logger.info("Inserted %s withholding limits", limits_count)
        except Exception as exc:
            logger.warning("Reseed failed: %s", exc)
            raise InternalError("Failed to reseed database") from exc

        return ReseedResult(
            success=True,
            message="Database reseeded successfully",
            stats=ReseedStats(
                users=len(users),
                sales=sales_count,
                commissions=commissions_count,
                withholding_limits=limits_count,
            ),
        )
