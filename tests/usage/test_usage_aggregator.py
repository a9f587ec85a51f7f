from __future__ import annotations

from datetime import date, datetime

import pytest

from src.techie_workspace.techie_workspace.usage.service import UsageAggregator


@pytest.fixture
def usage(sessions_repo, clock):
    return UsageAggregator(sessions_repo, clock=clock)


def test_total_sums_completed_and_active_sessions(usage, sessions_repo, member, clock):
    sessions_repo.add(
        user_id=member.user_id,
        check_in_time=datetime(2026, 2, 2, 9, 0),
        check_out_time=datetime(2026, 2, 2, 11, 0),
    )
    sessions_repo.add(user_id=member.user_id, check_in_time=datetime(2026, 2, 4, 10, 0))  # active, 120 min to noon

    total = usage.total_minutes(member.user_id, datetime(2026, 2, 2), datetime(2026, 2, 8, 23, 59, 59))

    assert total == 240


def test_window_applies_to_start_time_only(usage, sessions_repo, member, clock):
    # Starts inside the window, "now" is three days past its end.
    sessions_repo.add(user_id=member.user_id, check_in_time=datetime(2026, 2, 1, 12, 0))

    total = usage.total_minutes(member.user_id, datetime(2026, 2, 1), datetime(2026, 2, 1, 23, 59, 59))

    assert total == 3 * 24 * 60


def test_sessions_outside_window_and_other_users_are_ignored(usage, sessions_repo, member, other_member):
    sessions_repo.add(
        user_id=member.user_id,
        check_in_time=datetime(2026, 1, 30, 9, 0),
        check_out_time=datetime(2026, 1, 30, 17, 0),
    )
    sessions_repo.add(
        user_id=other_member.user_id,
        check_in_time=datetime(2026, 2, 3, 9, 0),
        check_out_time=datetime(2026, 2, 3, 17, 0),
    )

    assert usage.total_minutes(member.user_id, datetime(2026, 2, 2), datetime(2026, 2, 8, 23, 59)) == 0


def test_daily_breakdown_shape(usage, member):
    breakdown = usage.daily_breakdown(member.user_id, date(2026, 2, 4))

    assert [d.day for d in breakdown] == [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    ]
    assert all(d.minutes == 0 and d.percentage == 0 and d.hours == 0 for d in breakdown)


def test_daily_breakdown_clamps_full_days(usage, sessions_repo, member):
    sessions_repo.add(
        user_id=member.user_id,
        check_in_time=datetime(2026, 2, 3, 8, 0),
        check_out_time=datetime(2026, 2, 3, 16, 20),  # 500 minutes
    )
    sessions_repo.add(
        user_id=member.user_id,
        check_in_time=datetime(2026, 2, 2, 9, 0),
        check_out_time=datetime(2026, 2, 2, 13, 0),  # 240 minutes
    )

    breakdown = usage.daily_breakdown(member.user_id, date(2026, 2, 4))
    monday, tuesday = breakdown[0], breakdown[1]

    assert tuesday.minutes == 500
    assert tuesday.percentage == 100
    assert tuesday.hours == pytest.approx(8.33, abs=0.01)
    assert monday.percentage == 50
    assert monday.hours == 4


def test_daily_breakdown_counts_active_session_to_now(usage, sessions_repo, member, clock):
    sessions_repo.add(user_id=member.user_id, check_in_time=datetime(2026, 2, 4, 9, 0))

    wednesday = usage.daily_breakdown(member.user_id, clock.now)[2]

    assert wednesday.minutes == 180
    assert wednesday.percentage == 38  # round(37.5) half-up
