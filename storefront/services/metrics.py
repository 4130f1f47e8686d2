"""
Dashboard metrics derived from a user snapshot.

All functions are pure: the evaluation time is passed in, never read from a
clock, so results are reproducible in tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from storefront.domain.models import DashboardStats, UserRecord

RECENT_WINDOW_DAYS = 30


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values (including bare dates) are taken as UTC. Returns None for
    missing or unparseable input.
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_active(user: UserRecord) -> bool:
    # Absent (or blank) status is treated as active.
    return user.status == "active" or not user.status


def has_email(user: UserRecord) -> bool:
    return bool(user.email and user.email.strip())


def is_recent(user: UserRecord, cutoff: datetime) -> bool:
    created = parse_timestamp(user.created_at)
    return created is not None and created > cutoff


def compute_stats(
    records: Iterable[UserRecord],
    now: datetime,
    window_days: int = RECENT_WINDOW_DAYS,
) -> DashboardStats:
    """
    Compute dashboard counts for ``records`` as of ``now``.

    Parameters
    ----------
    records : iterable[UserRecord]
        Current snapshot.
    now : datetime
        Evaluation time; naive values are taken as UTC.
    window_days : int
        Length of the rolling window that classifies a user as recent.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=window_days)
    users = list(records)

    return DashboardStats(
        total_users=len(users),
        active_users=sum(1 for user in users if is_active(user)),
        recent_users=sum(1 for user in users if is_recent(user, cutoff)),
        users_with_email=sum(1 for user in users if has_email(user)),
    )


__all__ = ["RECENT_WINDOW_DAYS", "compute_stats", "has_email", "is_active", "parse_timestamp"]
