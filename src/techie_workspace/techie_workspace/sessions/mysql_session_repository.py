from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import SessionStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Session
from .repository import SessionRepository

_COLUMNS = "session_id, user_id, check_in_time, check_out_time, status, duration"


def _to_session(row: dict) -> Session:
    duration = row.get("duration")
    return Session(
        session_id=int(row["session_id"]),
        user_id=int(row["user_id"]),
        check_in_time=row["check_in_time"],
        check_out_time=row.get("check_out_time"),
        status=SessionStatus(row["status"]),
        duration=int(duration) if duration is not None else None,
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM check_in_sessions WHERE session_id=%s", (int(session_id),))
            row = fetchone(cur)
            return _to_session(row) if row else None

    def get_active_for_user(self, user_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM check_in_sessions WHERE user_id=%s AND status=%s",
                (int(user_id), SessionStatus.ACTIVE.value),
            )
            row = fetchone(cur)
            return _to_session(row) if row else None

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM check_in_sessions
                WHERE user_id=%s
                ORDER BY check_in_time DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM check_in_sessions
                WHERE user_id=%s AND check_in_time BETWEEN %s AND %s
                ORDER BY check_in_time DESC
                """,
                (int(user_id), start, end),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create_active(self, *, user_id: int, check_in_time: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO check_in_sessions(user_id, check_in_time, status)
                    VALUES(%s,%s,%s)
                    """,
                    (int(user_id), check_in_time, SessionStatus.ACTIVE.value),
                )
            except mysql.connector.IntegrityError as exc:
                # uq_check_in_sessions_active: another request won the race.
                raise ConflictError("You already have an active check-in") from exc
            return int(cur.lastrowid)

    def complete(self, *, session_id: int, check_out_time: datetime, duration: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE check_in_sessions
                SET check_out_time=%s, duration=%s, status=%s
                WHERE session_id=%s AND status=%s
                """,
                (
                    check_out_time,
                    int(duration),
                    SessionStatus.COMPLETED.value,
                    int(session_id),
                    SessionStatus.ACTIVE.value,
                ),
            )
            return cur.rowcount > 0
