from __future__ import annotations

from dataclasses import dataclass

from .billing.mysql_billing_repository import MySQLBillingRepository
from .billing.repository import BillingRepository
from .common.datetime_utils import Clock, now_local
from .database.connection import DatabaseConnection, DBConfig
from .plans.service import PlanService
from .qr.service import QRService
from .reports.service import ReportService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionLedger
from .usage.service import UsageAggregator
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    sessions_repo: SessionRepository
    billings_repo: BillingRepository

    auth_service: AuthService
    user_service: UserService
    session_ledger: SessionLedger
    usage_aggregator: UsageAggregator
    plan_service: PlanService
    report_service: ReportService
    qr_service: QRService


def build_services(
    *,
    users_repo: UserRepository,
    sessions_repo: SessionRepository,
    billings_repo: BillingRepository,
    clock: Clock = now_local,
) -> Container:
    """Wire services on top of the given storage capabilities."""
    session_ledger = SessionLedger(sessions_repo, users_repo, clock=clock)
    usage_aggregator = UsageAggregator(sessions_repo, clock=clock)

    return Container(
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        billings_repo=billings_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        session_ledger=session_ledger,
        usage_aggregator=usage_aggregator,
        plan_service=PlanService(users_repo, usage_aggregator, clock=clock),
        report_service=ReportService(sessions_repo, billings_repo, usage_aggregator, clock=clock),
        qr_service=QRService(users_repo, session_ledger, clock=clock),
    )


def build_container(*, db_config: dict, clock: Clock = now_local) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        billings_repo=MySQLBillingRepository(conn),
        clock=clock,
    )
