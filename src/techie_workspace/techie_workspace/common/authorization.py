from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role
from ..core.exceptions import ForbiddenError


@dataclass(frozen=True)
class Caller:
    """Authenticated identity supplied by the request boundary."""

    user_id: int
    role: Role = Role.USER

    @property
    def is_privileged(self) -> bool:
        return self.role == Role.ADMIN


def is_allowed(*, caller_id: int, caller_is_privileged: bool, target_user_id: int) -> bool:
    """A caller may act on their own data; admins may act on anyone's."""
    return caller_is_privileged or int(caller_id) == int(target_user_id)


def ensure_can_access(caller: Caller, target_user_id: int, *, what: str = "data") -> None:
    if not is_allowed(
        caller_id=caller.user_id,
        caller_is_privileged=caller.is_privileged,
        target_user_id=target_user_id,
    ):
        raise ForbiddenError(f"Cannot access other users' {what}")


def ensure_admin(caller: Caller) -> None:
    if not caller.is_privileged:
        raise ForbiddenError("Admin access required")
