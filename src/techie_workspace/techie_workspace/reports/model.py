from __future__ import annotations

from dataclasses import dataclass, field

from ..usage.model import DayUsage

NO_PEAK_DAY = "None"


@dataclass(frozen=True)
class UsageReport:
    total_minutes: int
    avg_daily_minutes: int
    peak_day: str
    day_breakdown: list[DayUsage] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_minutes": self.total_minutes,
            "avg_daily_minutes": self.avg_daily_minutes,
            "peak_day": self.peak_day,
            "day_breakdown": [d.to_dict() for d in self.day_breakdown],
        }
