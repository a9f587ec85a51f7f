from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import BillingStatus, PlanType, Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, username, password_hash, email, full_name, role, current_plan, qr_code, qr_expiry, created_at"


def _to_user(row: dict) -> User:
    plan = row.get("current_plan")
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        email=row["email"],
        full_name=row["full_name"],
        role=Role(row["role"]),
        current_plan=PlanType(plan) if plan else None,
        qr_code=row.get("qr_code"),
        qr_expiry=row.get("qr_expiry"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        email: str,
        full_name: str,
        role: Role,
        current_plan: PlanType,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO users(username, password_hash, email, full_name, role, current_plan)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (username, password_hash, email, full_name, role.value, current_plan.value),
                )
            except mysql.connector.IntegrityError as exc:
                raise ConflictError("Username or email already exists") from exc
            return int(cur.lastrowid)

    def update_profile(self, user_id: int, *, full_name: str, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "UPDATE users SET full_name=%s, email=%s WHERE user_id=%s",
                    (full_name, email, int(user_id)),
                )
            except mysql.connector.IntegrityError as exc:
                raise ConflictError("Email already in use") from exc
            return cur.rowcount > 0

    def switch_plan(
        self,
        user_id: int,
        plan: PlanType,
        *,
        amount: int,
        start_date: datetime,
        status: BillingStatus = BillingStatus.PENDING,
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET current_plan=%s WHERE user_id=%s", (plan.value, int(user_id)))
            if cur.rowcount == 0:
                return None
            cur.execute(
                """
                INSERT INTO billings(user_id, plan_type, amount, start_date, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), plan.value, int(amount), start_date, status.value),
            )
            return int(cur.lastrowid)

    def set_qr_code(self, user_id: int, *, qr_code: str, qr_expiry: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET qr_code=%s, qr_expiry=%s WHERE user_id=%s",
                (qr_code, qr_expiry, int(user_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        # One transaction: dependent rows first, then the user.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM check_in_sessions WHERE user_id=%s", (int(user_id),))
            cur.execute("DELETE FROM billings WHERE user_id=%s", (int(user_id),))
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id ASC")
            return [_to_user(r) for r in fetchall(cur)]
