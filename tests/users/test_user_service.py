from __future__ import annotations

from datetime import datetime

import pytest

from src.techie_workspace.techie_workspace.core.enums import PlanType, Role
from src.techie_workspace.techie_workspace.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)


def test_register_and_authenticate(container):
    user = container.user_service.register(
        username="dana",
        password="hunter22",
        email="dana@example.com",
        full_name="Dana",
    )

    s_user = container.auth_service.authenticate("dana", "hunter22")

    assert user.current_plan == PlanType.HOURLY
    assert user.role == Role.USER
    assert s_user.user_id == user.user_id
    assert "password_hash" not in user.to_public_dict()


def test_register_rejects_duplicates(container, member):
    with pytest.raises(ConflictError):
        container.user_service.register(
            username=member.username, password="hunter22", email="new@example.com", full_name="X"
        )


@pytest.mark.parametrize(
    "username,password,email",
    [("ab", "hunter22", "a@example.com"), ("abc", "short", "a@example.com"), ("abc", "hunter22", "nope")],
)
def test_register_validates_input(container, username, password, email):
    with pytest.raises(ValidationError):
        container.user_service.register(username=username, password=password, email=email, full_name="X")


def test_wrong_password_fails(container, member):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(member.username, "wrong-password")


def test_update_profile_self_only(container, member, other_member, caller_for):
    updated = container.user_service.update_profile(caller_for(member), member.user_id, full_name="Alice A.")

    assert updated.full_name == "Alice A."
    with pytest.raises(ForbiddenError):
        container.user_service.update_profile(caller_for(other_member), member.user_id, full_name="Hacked")


def test_list_users_requires_admin(container, member, admin, caller_for):
    assert len(container.user_service.list_all(caller_for(admin))) == 2
    with pytest.raises(ForbiddenError):
        container.user_service.list_all(caller_for(member))


def test_delete_user_cascades(container, sessions_repo, billings_repo, member, admin, caller_for):
    sessions_repo.add(user_id=member.user_id, check_in_time=datetime(2026, 2, 2, 9, 0))
    container.plan_service.change_plan(member.user_id, "daily")

    container.user_service.delete_user(caller_for(admin), member.user_id)

    assert sessions_repo.all() == []
    assert billings_repo.all() == []
    with pytest.raises(NotFoundError):
        container.user_service.get(member.user_id)


def test_delete_user_requires_admin(container, member, other_member, caller_for):
    with pytest.raises(ForbiddenError):
        container.user_service.delete_user(caller_for(other_member), member.user_id)
