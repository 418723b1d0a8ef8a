from __future__ import annotations

from datetime import datetime, timedelta, timezone


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt


def from_naive_utc(dt: datetime) -> datetime:
    """
    Attach UTC to a naive datetime that is known to be in UTC.

    google-auth reports credential expiry as naive UTC.
    """
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc)
    return dt.replace(tzinfo=timezone.utc)


def expiry_from_now(expires_in: int | float, now: datetime) -> datetime:
    """Compute an absolute expiry from a relative lifetime in seconds."""
    return normalize_dt(now) + timedelta(seconds=expires_in)
