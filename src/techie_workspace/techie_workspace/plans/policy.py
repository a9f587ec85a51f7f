"""Plan table: weekly allowance and billing rate per plan.

Single source for both quota minutes and monetary rates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..common.numbers import percentage
from ..core.enums import PlanType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PlanTerms:
    plan: PlanType
    name: str
    description: str
    weekly_minute_allowance: int
    rate: int
    rate_period: str

    def to_dict(self) -> dict:
        return {
            "plan": self.plan.value,
            "name": self.name,
            "description": self.description,
            "weekly_minute_allowance": self.weekly_minute_allowance,
            "rate": self.rate,
            "rate_period": self.rate_period,
        }


PLAN_TABLE: dict[PlanType, PlanTerms] = {
    PlanType.HOURLY: PlanTerms(PlanType.HOURLY, "Hourly Rate", "Pay only for the time you use", 20 * 60, 500, "hour"),
    PlanType.DAILY: PlanTerms(PlanType.DAILY, "Daily Rate", "Full day access", 40 * 60, 4000, "day"),
    PlanType.WEEKLY: PlanTerms(PlanType.WEEKLY, "Weekly Pass", "7 consecutive days", 50 * 60, 20000, "week"),
    PlanType.MONTHLY: PlanTerms(PlanType.MONTHLY, "Monthly Pass", "30 days unlimited access", 60 * 60, 68000, "month"),
}

DEFAULT_PLAN = PlanType.HOURLY


def parse_plan(value: Union[str, PlanType, None]) -> PlanType:
    """Strict lookup for user input; raises ValidationError for anything outside the table."""
    try:
        return PlanType(value)
    except ValueError:
        raise ValidationError("Invalid plan type")


def terms_for(plan: Optional[Union[str, PlanType]]) -> PlanTerms:
    """Terms for a stored plan; unset plans get the default (hourly) terms."""
    if not plan:
        return PLAN_TABLE[DEFAULT_PLAN]
    return PLAN_TABLE[parse_plan(plan)]


def utilization_percent(total_minutes: int, weekly_limit: int) -> int:
    # Not clamped: going over the allowance shows as > 100.
    return percentage(total_minutes, weekly_limit)
