from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.techie_workspace.techie_workspace.billing.model import BillingRecord
from src.techie_workspace.techie_workspace.common.authorization import Caller
from src.techie_workspace.techie_workspace.common.datetime_utils import whole_minutes_between
from src.techie_workspace.techie_workspace.container import build_services
from src.techie_workspace.techie_workspace.core.enums import BillingStatus, PlanType, Role, SessionStatus
from src.techie_workspace.techie_workspace.core.exceptions import ConflictError
from src.techie_workspace.techie_workspace.sessions.model import Session
from src.techie_workspace.techie_workspace.users.model import User

# Wednesday of the ISO week starting Monday 2026-02-02.
NOW = datetime(2026, 2, 4, 12, 0, 0)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemorySessions:
    def __init__(self):
        self._rows: dict[int, Session] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def get_by_id(self, session_id: int) -> Optional[Session]:
        return self._rows.get(int(session_id))

    def get_active_for_user(self, user_id: int) -> Optional[Session]:
        for s in self._rows.values():
            if s.user_id == user_id and s.is_active:
                return s
        return None

    def get_recent_for_user(self, user_id: int, limit: int):
        items = [s for s in self._rows.values() if s.user_id == user_id]
        items.sort(key=lambda s: s.check_in_time, reverse=True)
        return items[:limit]

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime):
        items = [s for s in self._rows.values() if s.user_id == user_id and start <= s.check_in_time <= end]
        items.sort(key=lambda s: s.check_in_time, reverse=True)
        return items

    def create_active(self, *, user_id: int, check_in_time: datetime) -> int:
        with self._lock:
            if self.get_active_for_user(user_id):
                raise ConflictError("You already have an active check-in")
            self._next_id += 1
            self._rows[self._next_id] = Session(session_id=self._next_id, user_id=user_id, check_in_time=check_in_time)
            return self._next_id

    def complete(self, *, session_id: int, check_out_time: datetime, duration: int) -> bool:
        with self._lock:
            s = self._rows.get(int(session_id))
            if not s or not s.is_active:
                return False
            self._rows[s.session_id] = replace(
                s, check_out_time=check_out_time, duration=duration, status=SessionStatus.COMPLETED
            )
            return True

    def add(self, *, user_id: int, check_in_time: datetime, check_out_time: Optional[datetime] = None) -> Session:
        """Seed a session directly (completed when check_out_time is given)."""
        self._next_id += 1
        s = Session(session_id=self._next_id, user_id=user_id, check_in_time=check_in_time)
        if check_out_time is not None:
            s = replace(
                s,
                check_out_time=check_out_time,
                duration=whole_minutes_between(check_in_time, check_out_time),
                status=SessionStatus.COMPLETED,
            )
        self._rows[s.session_id] = s
        return s

    def delete_for_user(self, user_id: int) -> None:
        self._rows = {k: v for k, v in self._rows.items() if v.user_id != user_id}

    def all(self):
        return list(self._rows.values())


class InMemoryBillings:
    def __init__(self):
        self._rows: list[BillingRecord] = []

    def create(self, *, user_id, plan_type, amount, start_date, status=BillingStatus.PENDING) -> int:
        billing_id = len(self._rows) + 1
        self._rows.append(
            BillingRecord(
                billing_id=billing_id,
                user_id=user_id,
                plan_type=plan_type,
                amount=amount,
                start_date=start_date,
                status=status,
            )
        )
        return billing_id

    def list_for_user(self, user_id: int):
        return sorted((b for b in self._rows if b.user_id == user_id), key=lambda b: b.start_date, reverse=True)

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime):
        return [b for b in self.list_for_user(user_id) if start <= b.start_date <= end]

    def delete_for_user(self, user_id: int) -> None:
        self._rows = [b for b in self._rows if b.user_id != user_id]

    def all(self):
        return list(self._rows)


class InMemoryUsers:
    def __init__(self, sessions: InMemorySessions, billings: InMemoryBillings):
        self._by_id: dict[int, User] = {}
        self._sessions = sessions
        self._billings = billings

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, username, password_hash, email, full_name, role, current_plan) -> int:
        user_id = max(self._by_id, default=0) + 1
        self._by_id[user_id] = User(
            user_id=user_id,
            username=username,
            password_hash=password_hash,
            email=email,
            full_name=full_name,
            role=role,
            current_plan=current_plan,
            created_at=NOW,
        )
        return user_id

    def update_profile(self, user_id: int, *, full_name: str, email: str) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, full_name=full_name, email=email)
        return True

    def switch_plan(self, user_id: int, plan: PlanType, *, amount, start_date, status=BillingStatus.PENDING):
        user = self._by_id.get(int(user_id))
        if not user:
            return None
        # Plan is written only once the billing row is in, as in one transaction.
        billing_id = self._billings.create(
            user_id=user.user_id, plan_type=plan, amount=amount, start_date=start_date, status=status
        )
        self._by_id[user.user_id] = replace(user, current_plan=plan)
        return billing_id

    def set_qr_code(self, user_id: int, *, qr_code: str, qr_expiry: datetime) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, qr_code=qr_code, qr_expiry=qr_expiry)
        return True

    def delete_by_id(self, user_id: int) -> bool:
        if int(user_id) not in self._by_id:
            return False
        self._sessions.delete_for_user(int(user_id))
        self._billings.delete_for_user(int(user_id))
        del self._by_id[int(user_id)]
        return True

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]

    def set_role(self, user_id: int, role: Role) -> None:
        self._by_id[int(user_id)] = replace(self._by_id[int(user_id)], role=role)

    def add(self, username: str, *, role: Role = Role.USER, plan: Optional[PlanType] = PlanType.HOURLY, password: str = "secret123") -> User:
        user_id = self.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            email=f"{username}@example.com",
            full_name=username.title(),
            role=role,
            current_plan=plan,
        )
        return self._by_id[user_id]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def billings_repo() -> InMemoryBillings:
    return InMemoryBillings()


@pytest.fixture
def users_repo(sessions_repo, billings_repo) -> InMemoryUsers:
    return InMemoryUsers(sessions_repo, billings_repo)


@pytest.fixture
def member(users_repo) -> User:
    return users_repo.add("alice")


@pytest.fixture
def other_member(users_repo) -> User:
    return users_repo.add("bob")


@pytest.fixture
def admin(users_repo) -> User:
    return users_repo.add("root", role=Role.ADMIN, plan=PlanType.MONTHLY)


@pytest.fixture
def caller_for():
    def _make(user: User) -> Caller:
        return Caller(user_id=user.user_id, role=user.role)

    return _make


@pytest.fixture
def container(users_repo, sessions_repo, billings_repo, clock):
    return build_services(
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        billings_repo=billings_repo,
        clock=clock,
    )
