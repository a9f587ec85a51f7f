from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import BillingStatus, PlanType, Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

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
        """Insert a user; raises ConflictError when username or email is taken."""

        raise NotImplementedError

    def update_profile(self, user_id: int, *, full_name: str, email: str) -> bool:
        raise NotImplementedError

    def switch_plan(
        self,
        user_id: int,
        plan: PlanType,
        *,
        amount: int,
        start_date: datetime,
        status: BillingStatus = BillingStatus.PENDING,
    ) -> Optional[int]:
        """Set the plan and append its billing record in one transaction.

        Returns the new billing id, or None when the user does not exist.
        """

        raise NotImplementedError

    def set_qr_code(self, user_id: int, *, qr_code: str, qr_expiry: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        """Delete the user together with their sessions and billing records."""

        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
