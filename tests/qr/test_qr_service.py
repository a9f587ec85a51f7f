from __future__ import annotations

import json
from datetime import datetime

import pytest

from src.techie_workspace.techie_workspace.common.datetime_utils import add_months
from src.techie_workspace.techie_workspace.core.enums import SessionStatus
from src.techie_workspace.techie_workspace.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from src.techie_workspace.techie_workspace.qr.payload import build_payload, parse_payload
from src.techie_workspace.techie_workspace.qr.service import CHECKED_IN, CHECKED_OUT


def _payload(user_id, workspace="techie"):
    return json.dumps({"userId": user_id, "workspace": workspace, "timestamp": 1770206400000, "token": "ab" * 16})


def test_build_payload_content(clock):
    data = json.loads(build_payload(7, clock.now).to_json())

    assert set(data) == {"userId", "workspace", "timestamp", "token"}
    assert data["userId"] == 7
    assert data["workspace"] == "techie"
    assert data["timestamp"] == int(clock.now.timestamp() * 1000)
    assert len(data["token"]) == 32
    int(data["token"], 16)


def test_parse_payload_round_trip(clock):
    payload = build_payload(3, clock.now)

    assert parse_payload(payload.to_json()) == payload


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2]",
        _payload(1, workspace="elsewhere"),
        json.dumps({"workspace": "techie", "timestamp": 1, "token": "x"}),
        json.dumps({"userId": "1", "workspace": "techie", "timestamp": 1, "token": "x"}),
        json.dumps({"userId": 1, "workspace": "techie", "timestamp": 1, "token": ""}),
    ],
)
def test_parse_payload_rejects_invalid(raw):
    with pytest.raises(ValidationError):
        parse_payload(raw)


def test_scan_from_other_workspace_never_reaches_ledger(container, sessions_repo, member, caller_for):
    with pytest.raises(ValidationError):
        container.qr_service.scan(_payload(member.user_id, workspace="rival"), caller_for(member))

    assert sessions_repo.all() == []


def test_scan_toggles_check_in_and_out(container, member, clock, caller_for):
    first = container.qr_service.scan(_payload(member.user_id), caller_for(member))
    clock.advance(minutes=45)
    second = container.qr_service.scan(_payload(member.user_id), caller_for(member))

    assert first.action == CHECKED_IN
    assert first.session.status == SessionStatus.ACTIVE
    assert second.action == CHECKED_OUT
    assert second.session.session_id == first.session.session_id
    assert second.session.duration == 45


def test_scan_for_another_member_is_forbidden(container, member, other_member, caller_for):
    with pytest.raises(ForbiddenError):
        container.qr_service.scan(_payload(member.user_id), caller_for(other_member))


def test_admin_scan_checks_member_in(container, member, admin, caller_for):
    result = container.qr_service.scan(_payload(member.user_id), caller_for(admin))

    assert result.session.user_id == member.user_id


def test_generate_stores_code_for_one_month(container, users_repo, member, clock):
    issued = container.qr_service.generate(member.user_id)

    assert issued.qr_code.startswith("data:image/png;base64,")
    assert issued.expiry_date == datetime(2026, 3, 4, 12, 0, 0)
    assert users_repo.get_by_id(member.user_id).qr_code == issued.qr_code
    assert container.qr_service.current(member.user_id) == issued


def test_current_rejects_missing_or_expired_code(container, member, clock):
    with pytest.raises(NotFoundError):
        container.qr_service.current(member.user_id)

    container.qr_service.generate(member.user_id)
    clock.advance(days=40)

    with pytest.raises(NotFoundError):
        container.qr_service.current(member.user_id)


def test_add_months_clamps_to_month_end():
    assert add_months(datetime(2026, 1, 31, 9, 0), 1) == datetime(2026, 2, 28, 9, 0)
    assert add_months(datetime(2026, 12, 15), 1) == datetime(2027, 1, 15)
