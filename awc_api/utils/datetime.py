from __future__ import annotations
from datetime import datetime, UTC
from typing import Optional
from zoneinfo import ZoneInfo

__all__ = ["utc_now", "ensure_aware_utc", "to_naive_utc", "to_local", "isoformat_z"]

def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(UTC)

def ensure_aware_utc(dt: datetime | None) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware in UTC (assumes naive input already in UTC)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)

def to_naive_utc(dt: datetime | None) -> Optional[datetime]:
    """Convert aware datetime to naive UTC for SQLite storage; pass through naive assumed UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(UTC).replace(tzinfo=None)

def to_local(dt: datetime, tz_name: str) -> datetime:
    """Convert a (UTC or aware) instant to wall-clock time in ``tz_name``."""
    return ensure_aware_utc(dt).astimezone(ZoneInfo(tz_name))

def isoformat_z(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z, e.g. 2026-10-17T12:00:00.000Z."""
    return ensure_aware_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")
