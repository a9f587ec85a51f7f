from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DayUsage:
    """One row of the weekly per-day breakdown."""

    day: str
    minutes: int
    hours: float
    percentage: int

    def to_dict(self) -> dict:
        return {"day": self.day, "minutes": self.minutes, "hours": self.hours, "percentage": self.percentage}
