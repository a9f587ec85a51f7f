from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import Clock, now_local
from ..common.numbers import percentage
from ..common.time_window import DateLike, day_window, week_days
from ..core.constants import FULL_DAY_MINUTES
from ..sessions.model import Session
from ..sessions.repository import SessionRepository
from .model import DayUsage

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def sum_minutes(sessions: Iterable[Session], now: datetime) -> int:
    """Completed sessions count their stored duration, active ones count elapsed-to-now."""
    return sum(s.minutes_used(now) for s in sessions)


class UsageAggregator:
    """Usage totals over time windows.

    A session belongs to a window when its check-in time does; an active
    session counts in full up to "now" even if now lies past the window end.
    """

    def __init__(self, sessions: SessionRepository, *, clock: Clock = now_local):
        self._sessions = sessions
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def total_minutes(self, user_id: int, window_start: datetime, window_end: datetime, *, now: Optional[datetime] = None) -> int:
        sessions = self._sessions.list_for_user_between(int(user_id), start=window_start, end=window_end)
        return sum_minutes(sessions, now or self._clock())

    def daily_breakdown(self, user_id: int, reference_date: DateLike) -> list[DayUsage]:
        now = self._clock()
        out: list[DayUsage] = []
        for name, day in zip(DAY_NAMES, week_days(reference_date)):
            window = day_window(day)
            minutes = self.total_minutes(user_id, window.start, window.end, now=now)
            out.append(
                DayUsage(
                    day=name,
                    minutes=minutes,
                    hours=minutes / 60,
                    percentage=min(percentage(minutes, FULL_DAY_MINUTES), 100),
                )
            )
        return out
