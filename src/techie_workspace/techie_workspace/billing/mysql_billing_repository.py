from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import BillingStatus, PlanType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import BillingRecord
from .repository import BillingRepository

_COLUMNS = "billing_id, user_id, plan_type, amount, start_date, end_date, status"


def _to_record(row: dict) -> BillingRecord:
    return BillingRecord(
        billing_id=int(row["billing_id"]),
        user_id=int(row["user_id"]),
        plan_type=PlanType(row["plan_type"]),
        amount=int(row["amount"]),
        start_date=row["start_date"],
        end_date=row.get("end_date"),
        status=BillingStatus(row["status"]),
    )


class MySQLBillingRepository(BillingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: int) -> Sequence[BillingRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM billings WHERE user_id=%s ORDER BY start_date DESC",
                (int(user_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime) -> Sequence[BillingRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM billings
                WHERE user_id=%s AND start_date BETWEEN %s AND %s
                ORDER BY start_date DESC
                """,
                (int(user_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]
