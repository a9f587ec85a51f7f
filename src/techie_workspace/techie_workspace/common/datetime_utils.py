from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Callable

Clock = Callable[[], datetime]

_ONE_MINUTE = timedelta(minutes=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Services take a ``clock`` argument defaulting to this, so tests can pass a fixed one.
    """
    return datetime.now()


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, floored."""
    return (end - start) // _ONE_MINUTE


def add_months(value: datetime, months: int) -> datetime:
    """Same day-of-month ``months`` later, clamped to the last day of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def to_epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)
