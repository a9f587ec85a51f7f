from __future__ import annotations

from dataclasses import dataclass

from .policy import utilization_percent


@dataclass(frozen=True)
class WeeklyUsage:
    total_minutes: int
    weekly_limit: int

    @property
    def utilization_percent(self) -> int:
        return utilization_percent(self.total_minutes, self.weekly_limit)

    def to_dict(self) -> dict:
        return {
            "total_minutes": self.total_minutes,
            "weekly_limit": self.weekly_limit,
            "utilization_percent": self.utilization_percent,
        }
