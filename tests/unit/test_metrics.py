from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from storefront.domain.models import UserRecord
from storefront.services.metrics import compute_stats, parse_timestamp

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def _users(raw):
    return [UserRecord.model_validate(item) for item in raw]


def test_compute_stats_on_sample(sample_users) -> None:
    stats = compute_stats(_users(sample_users), NOW)

    assert stats.total_users == 4
    # "active" and two records without status
    assert stats.active_users == 3
    # only Ana is inside the window; Carla's timestamp is unparseable
    assert stats.recent_users == 1
    # Bruno's email is whitespace only
    assert stats.users_with_email == 2


def test_compute_stats_empty_snapshot() -> None:
    stats = compute_stats([], NOW)
    assert stats.model_dump() == {
        "total_users": 0,
        "active_users": 0,
        "recent_users": 0,
        "users_with_email": 0,
    }


@pytest.mark.parametrize(
    "statuses",
    [
        ["active", None, "inactive", "banned"],
        [None, None],
        ["inactive", "pending", "active"],
        [],
    ],
)
def test_active_plus_defined_non_active_equals_total(statuses) -> None:
    users = [UserRecord(id=str(i), status=status) for i, status in enumerate(statuses)]
    stats = compute_stats(users, NOW)

    defined_non_active = sum(1 for status in statuses if status is not None and status != "active")
    assert stats.total_users == len(users)
    assert stats.active_users + defined_non_active == stats.total_users


def test_recent_window_boundary_is_strict() -> None:
    cutoff = NOW - timedelta(days=30)
    users = [
        UserRecord(id="edge", created_at=cutoff.isoformat()),
        UserRecord(id="inside", created_at=(cutoff + timedelta(seconds=1)).isoformat()),
        UserRecord(id="outside", created_at=(cutoff - timedelta(seconds=1)).isoformat()),
        UserRecord(id="missing"),
    ]

    assert compute_stats(users, NOW).recent_users == 1


def test_recent_window_is_configurable() -> None:
    users = [UserRecord(id="1", created_at="2026-10-01T00:00:00Z")]
    assert compute_stats(users, NOW, window_days=7).recent_users == 0
    assert compute_stats(users, NOW, window_days=30).recent_users == 1


def test_naive_now_is_treated_as_utc() -> None:
    users = [UserRecord(id="1", created_at="2026-10-16T00:00:00Z")]
    assert compute_stats(users, datetime(2026, 10, 17)).recent_users == 1


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2026-10-10T08:00:00Z", datetime(2026, 10, 10, 8, tzinfo=timezone.utc)),
        ("2026-10-10", datetime(2026, 10, 10, tzinfo=timezone.utc)),
        (
            "2026-10-10T08:00:00+02:00",
            datetime(2026, 10, 10, 6, tzinfo=timezone.utc),
        ),
        ("garbage", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_timestamp(value, expected) -> None:
    assert parse_timestamp(value) == expected


def test_epoch_millis_created_at_counts_as_recent() -> None:
    # 2026-10-07T12:00:00Z, ten days before NOW
    users = [UserRecord.model_validate({"id": "1", "createdAt": 1791374400000})]
    assert compute_stats(users, NOW).recent_users == 1
