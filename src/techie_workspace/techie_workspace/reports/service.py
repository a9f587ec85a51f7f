from __future__ import annotations

from typing import Optional, Sequence

from ..billing.model import BillingRecord
from ..billing.repository import BillingRepository
from ..common.authorization import Caller, ensure_can_access
from ..common.datetime_utils import Clock, now_local
from ..common.numbers import round_half_up
from ..common.time_window import DateLike, resolve_window
from ..sessions.model import Session
from ..sessions.repository import SessionRepository
from ..usage.model import DayUsage
from ..usage.service import UsageAggregator, sum_minutes
from .model import NO_PEAK_DAY, UsageReport


def find_peak_day(breakdown: Sequence[DayUsage]) -> str:
    """First day (Monday-first) holding the strictly largest positive total."""
    peak = NO_PEAK_DAY
    best = 0
    for day in breakdown:
        if day.minutes > best:
            best = day.minutes
            peak = day.day
    return peak


def average_daily_minutes(total_minutes: int, breakdown: Sequence[DayUsage]) -> int:
    active_days = sum(1 for d in breakdown if d.minutes > 0) or 1
    return round_half_up(total_minutes / active_days)


class ReportService:
    """Attendance, usage and billing reports for a period around a reference date.

    Every accessor checks that the caller may read the target user's data.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        billings: BillingRepository,
        usage: UsageAggregator,
        *,
        clock: Clock = now_local,
    ):
        self._sessions = sessions
        self._billings = billings
        self._usage = usage
        self._clock = clock

    def _reference(self, reference_date: Optional[DateLike]) -> DateLike:
        return reference_date if reference_date is not None else self._clock()

    def attendance_report(
        self,
        caller: Caller,
        user_id: int,
        period: Optional[str],
        reference_date: Optional[DateLike] = None,
    ) -> list[Session]:
        ensure_can_access(caller, user_id, what="reports")
        return self._attendance(user_id, period, self._reference(reference_date))

    def usage_report(
        self,
        caller: Caller,
        user_id: int,
        period: Optional[str],
        reference_date: Optional[DateLike] = None,
    ) -> UsageReport:
        ensure_can_access(caller, user_id, what="reports")
        reference = self._reference(reference_date)

        now = self._clock()
        sessions = self._attendance(user_id, period, reference)
        total = sum_minutes(sessions, now)

        # Breakdown is always the current ISO week, whatever the period or reference date.
        breakdown = self._usage.daily_breakdown(user_id, now.date())

        return UsageReport(
            total_minutes=total,
            avg_daily_minutes=average_daily_minutes(total, breakdown),
            peak_day=find_peak_day(breakdown),
            day_breakdown=breakdown,
        )

    def billing_report(
        self,
        caller: Caller,
        user_id: int,
        period: Optional[str],
        reference_date: Optional[DateLike] = None,
    ) -> list[BillingRecord]:
        ensure_can_access(caller, user_id, what="reports")
        window = resolve_window(period, self._reference(reference_date))
        return list(self._billings.list_for_user_between(int(user_id), start=window.start, end=window.end))

    def billing_history(self, caller: Caller, user_id: int) -> list[BillingRecord]:
        ensure_can_access(caller, user_id, what="billing")
        return list(self._billings.list_for_user(int(user_id)))

    def _attendance(self, user_id: int, period: Optional[str], reference: DateLike) -> list[Session]:
        window = resolve_window(period, reference)
        return list(self._sessions.list_for_user_between(int(user_id), start=window.start, end=window.end))
