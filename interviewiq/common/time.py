from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime.

    Returns:
        datetime: timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from the database.

    SQLite drops tzinfo on ``DateTime(timezone=True)`` columns, Postgres keeps it.

    Args:
        value: datetime loaded from a row.

    Returns:
        datetime: timezone-aware datetime.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def epoch_millis(now: datetime | None = None) -> int:
    """Milliseconds since the epoch for ``now`` (defaults to utc_now)."""
    return int((now or utc_now()).timestamp() * 1000)
