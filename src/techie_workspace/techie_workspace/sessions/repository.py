from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def get_active_for_user(self, user_id: int) -> Optional[Session]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[Session]:
        """Most recent check-in first."""

        raise NotImplementedError

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime) -> Sequence[Session]:
        """Sessions whose check-in time lies in [start, end], most recent first."""

        raise NotImplementedError

    def create_active(self, *, user_id: int, check_in_time: datetime) -> int:
        """Insert an ACTIVE session.

        Must be atomic with respect to other inserts for the same user: raises
        ConflictError if the user already has an ACTIVE session.
        """

        raise NotImplementedError

    def complete(self, *, session_id: int, check_out_time: datetime, duration: int) -> bool:
        """ACTIVE -> COMPLETED. Returns False if the row was not ACTIVE."""

        raise NotImplementedError
