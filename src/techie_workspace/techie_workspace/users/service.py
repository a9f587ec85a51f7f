from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.authorization import Caller, ensure_admin, ensure_can_access
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from ..core.enums import PlanType, Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            full_name=user.full_name,
            role=user.role,
        )


class UserService:
    """Use case: member accounts and admin user management."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
        plan: Optional[str] = None,
    ) -> User:
        username = require_non_empty(username, "Username")
        require_min_length(username, "Username", MIN_USERNAME_LENGTH)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        email = require_email(email)
        full_name = require_non_empty(full_name, "Full name")

        try:
            current_plan = PlanType(plan) if plan else PlanType.HOURLY
        except ValueError:
            raise ValidationError("Invalid plan type")

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")
        if self._users.get_by_email(email):
            raise ConflictError("Email already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            email=email,
            full_name=full_name,
            role=Role.USER,
            current_plan=current_plan,
        )
        logger.info("Registered user %s (id=%s)", username, user_id)
        return self.get(user_id)

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_all(self, caller: Caller) -> Sequence[User]:
        ensure_admin(caller)
        return self._users.list_all()

    def update_profile(
        self,
        caller: Caller,
        user_id: int,
        *,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        ensure_can_access(caller, user_id, what="accounts")
        user = self.get(user_id)

        new_name = require_non_empty(full_name, "Full name") if full_name is not None else user.full_name
        new_email = require_email(email) if email is not None else user.email

        if new_email != user.email:
            other = self._users.get_by_email(new_email)
            if other and other.user_id != user.user_id:
                raise ConflictError("Email already exists")

        self._users.update_profile(user.user_id, full_name=new_name, email=new_email)
        return self.get(user.user_id)

    def delete_user(self, caller: Caller, user_id: int) -> None:
        ensure_admin(caller)
        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError("User not found")
        logger.info("User %s deleted by admin %s", user_id, caller.user_id)
