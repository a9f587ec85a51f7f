"""Period boundaries for reports and quota checks.

Windows are closed intervals ``[start, end]`` with ``end`` at 23:59:59.999 of the
last day, so a plain ``start <= t <= end`` test selects the records in range.
Weeks are ISO weeks (Monday first).
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

from ..core.enums import ReportPeriod

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def _as_date(reference: DateLike) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def _span(first: date, last: date) -> TimeWindow:
    return TimeWindow(start=datetime.combine(first, time.min), end=datetime.combine(last, END_OF_DAY))


def day_window(reference: DateLike) -> TimeWindow:
    day = _as_date(reference)
    return _span(day, day)


def week_start(reference: DateLike) -> date:
    day = _as_date(reference)
    return day - timedelta(days=day.weekday())


def week_days(reference: DateLike) -> list[date]:
    """The seven dates of the ISO week containing ``reference``, Monday first."""
    monday = week_start(reference)
    return [monday + timedelta(days=i) for i in range(7)]


def week_window(reference: DateLike) -> TimeWindow:
    monday = week_start(reference)
    return _span(monday, monday + timedelta(days=6))


def month_window(reference: DateLike) -> TimeWindow:
    day = _as_date(reference)
    last = calendar.monthrange(day.year, day.month)[1]
    return _span(day.replace(day=1), day.replace(day=last))


def year_window(reference: DateLike) -> TimeWindow:
    day = _as_date(reference)
    return _span(date(day.year, 1, 1), date(day.year, 12, 31))


_RESOLVERS = {
    ReportPeriod.DAILY: day_window,
    ReportPeriod.WEEKLY: week_window,
    ReportPeriod.MONTHLY: month_window,
    ReportPeriod.YEARLY: year_window,
}


def resolve_window(period: Union[str, ReportPeriod, None], reference: DateLike) -> TimeWindow:
    """Resolve ``period`` around ``reference``.

    Unknown periods fall back to the daily window instead of raising.
    """
    try:
        key = ReportPeriod(period)
    except ValueError:
        logger.debug("Unknown report period %r, using daily window", period)
        key = ReportPeriod.DAILY
    return _RESOLVERS[key](reference)
