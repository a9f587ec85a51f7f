from __future__ import annotations

import logging
from typing import Union

from ..billing.model import BillingRecord
from ..common.datetime_utils import Clock, now_local
from ..common.time_window import week_window
from ..core.enums import BillingStatus, PlanType
from ..core.exceptions import NotFoundError
from ..usage.service import UsageAggregator
from ..users.repository import UserRepository
from .model import WeeklyUsage
from .policy import PLAN_TABLE, PlanTerms, parse_plan, terms_for

logger = logging.getLogger(__name__)


class PlanService:
    """Use case: quota checks against the plan table, and plan changes."""

    def __init__(
        self,
        users: UserRepository,
        usage: UsageAggregator,
        *,
        clock: Clock = now_local,
    ):
        self._users = users
        self._usage = usage
        self._clock = clock

    @staticmethod
    def list_plans() -> list[PlanTerms]:
        return list(PLAN_TABLE.values())

    def weekly_usage(self, user_id: int) -> WeeklyUsage:
        now = self._clock()
        window = week_window(now)
        total = self._usage.total_minutes(user_id, window.start, window.end, now=now)

        user = self._users.get_by_id(int(user_id))
        limit = terms_for(user.current_plan if user else None).weekly_minute_allowance
        return WeeklyUsage(total_minutes=total, weekly_limit=limit)

    def change_plan(self, user_id: int, new_plan: Union[str, PlanType]) -> BillingRecord:
        """Switch plans and append one PENDING billing record at the new rate.

        Earlier PENDING records are left untouched.
        """
        plan = parse_plan(new_plan)
        now = self._clock()
        terms = PLAN_TABLE[plan]
        billing_id = self._users.switch_plan(
            int(user_id),
            plan,
            amount=terms.rate,
            start_date=now,
            status=BillingStatus.PENDING,
        )
        if billing_id is None:
            raise NotFoundError("User not found")
        logger.info("User %s switched to %s plan (billing=%s)", user_id, plan.value, billing_id)
        return BillingRecord(
            billing_id=billing_id,
            user_id=int(user_id),
            plan_type=plan,
            amount=terms.rate,
            start_date=now,
            status=BillingStatus.PENDING,
        )
