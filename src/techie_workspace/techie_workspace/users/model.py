from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PlanType, Role


@dataclass(frozen=True)
class User:
    """Domain entity: a coworking member.

    Plain data object, no DB access code here.
    """

    user_id: int
    username: str
    password_hash: str
    email: str
    full_name: str
    role: Role = Role.USER
    current_plan: Optional[PlanType] = PlanType.HOURLY
    qr_code: Optional[str] = None
    qr_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict:
        """Serializable view without the password hash."""
        return {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role.value,
            "current_plan": self.current_plan.value if self.current_plan else None,
            "qr_expiry": self.qr_expiry.isoformat() if self.qr_expiry else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
