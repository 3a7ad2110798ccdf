"""
Date helpers.

All timestamps are stored as naive UTC datetimes.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def from_epoch(epoch: int | float) -> datetime:
    """Unix timestamp -> naive UTC datetime."""
    return datetime.fromtimestamp(epoch, tz=timezone.utc).replace(tzinfo=None)


def to_epoch(value: datetime) -> int:
    """Naive UTC datetime -> Unix timestamp."""
    return int(value.replace(tzinfo=timezone.utc).timestamp())


def parse_strava_date(raw: str | None) -> datetime | None:
    """
    Parse an ISO-8601 Strava timestamp ("2026-01-08T17:00:00Z").

    Returns naive UTC, or None if missing or malformed.
    """
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def month_start(now: datetime) -> datetime:
    """First instant of the calendar month containing `now`."""
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def previous_month_start(now: datetime) -> datetime:
    """First instant of the calendar month before the one containing `now`."""
    first = month_start(now)
    if first.month == 1:
        return first.replace(year=first.year - 1, month=12)
    return first.replace(month=first.month - 1)


def year_start(now: datetime) -> datetime:
    """First instant of the calendar year containing `now`."""
    return month_start(now).replace(month=1)
