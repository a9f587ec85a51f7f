from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import whole_minutes_between
from ..core.enums import SessionStatus


@dataclass(frozen=True)
class Session:
    """Domain entity: one check-in/check-out cycle.

    ``check_out_time`` and ``duration`` are set together, exactly when the
    status is COMPLETED.
    """

    session_id: int
    user_id: int
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    status: SessionStatus = SessionStatus.ACTIVE
    duration: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    def elapsed_minutes(self, now: datetime) -> int:
        """Minutes since check-in, recomputed on every read."""
        return whole_minutes_between(self.check_in_time, now)

    def minutes_used(self, now: datetime) -> int:
        """Stored duration when completed, elapsed-to-now when still active."""
        if self.is_active:
            return self.elapsed_minutes(now)
        return int(self.duration or 0)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "check_in_time": self.check_in_time.isoformat(),
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "duration": self.duration,
        }
