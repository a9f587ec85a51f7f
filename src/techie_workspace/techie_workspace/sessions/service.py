from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.authorization import Caller, is_allowed
from ..common.datetime_utils import Clock, now_local, whole_minutes_between
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.exceptions import ConflictError, ForbiddenError, InvalidStateError, NotFoundError
from ..users.repository import UserRepository
from .model import Session
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionLedger:
    """Check-in/check-out state per user.

    At most one ACTIVE session per user. The pre-check here gives a clean error;
    the repository's atomic insert is what actually guards concurrent check-ins.
    """

    def __init__(self, sessions: SessionRepository, users: UserRepository, *, clock: Clock = now_local):
        self._sessions = sessions
        self._users = users
        self._clock = clock

    def check_in(self, user_id: int) -> Session:
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")

        if self._sessions.get_active_for_user(int(user_id)):
            raise ConflictError("You already have an active check-in")

        now = self._clock()
        session_id = self._sessions.create_active(user_id=int(user_id), check_in_time=now)
        logger.info("User %s checked in (session=%s)", user_id, session_id)
        return self._require(session_id)

    def check_out(self, session_id: int, caller: Caller) -> Session:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Check-in record not found")

        if not is_allowed(
            caller_id=caller.user_id,
            caller_is_privileged=caller.is_privileged,
            target_user_id=session.user_id,
        ):
            raise ForbiddenError("Not your check-in record")

        if not session.is_active:
            raise InvalidStateError("This check-in is already completed")

        now = self._clock()
        duration = whole_minutes_between(session.check_in_time, now)
        if not self._sessions.complete(session_id=session.session_id, check_out_time=now, duration=duration):
            # Lost a race with another check-out of the same session.
            raise InvalidStateError("This check-in is already completed")

        logger.info("User %s checked out (session=%s, %s min)", session.user_id, session.session_id, duration)
        return self._require(session.session_id)

    def get_active(self, user_id: int) -> Optional[Session]:
        return self._sessions.get_active_for_user(int(user_id))

    def get_recent(self, user_id: int, limit: int = DEFAULT_RECENT_LIMIT) -> Sequence[Session]:
        if limit <= 0:
            return []
        return list(self._sessions.get_recent_for_user(int(user_id), int(limit)))[:limit]

    def _require(self, session_id: int) -> Session:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Check-in record not found")
        return session
