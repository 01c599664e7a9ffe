# reservation_admin/utils/datetime.py
from __future__ import annotations

from datetime import UTC, date, datetime


def as_utc_naive(dt: datetime | None) -> datetime | None:
    if dt is None:
        return None
    if dt.tzinfo is not None:
        # backend expects local wall-clock LocalDateTime values; aware input is pinned to UTC
        return dt.astimezone(UTC).replace(tzinfo=None)
    return dt


def to_api_datetime(dt: datetime | None) -> str | None:
    dt = as_utc_naive(dt)
    return dt.isoformat(timespec="seconds") if dt else None


def to_api_date(value: date | datetime | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
