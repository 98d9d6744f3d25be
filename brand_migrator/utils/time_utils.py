from datetime import datetime, timezone
import zoneinfo
from typing import Optional


def _resolve_tz_name(zone: Optional[str] = None) -> str:
    """Resolve a timezone name, defaulting to UTC."""
    if isinstance(zone, str) and zone.strip():
        return zone.strip()
    return 'UTC'


def get_time_date_dt(zone: Optional[str] = None, dt: datetime = None) -> datetime:
    """Return an aware datetime in the requested timezone.

    Single source of truth for "now" in the migrator; other modules should use
    this (or current_year / utc_now) instead of calling datetime.now() directly.
    Unknown zone names fall back to UTC.
    """
    tz_name = _resolve_tz_name(zone)
    try:
        tz = zoneinfo.ZoneInfo(tz_name)
    except Exception:
        tz = timezone.utc

    if dt is None:
        return datetime.now(tz)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def current_year(zone: Optional[str] = None, dt: datetime = None) -> int:
    return get_time_date_dt(zone=zone, dt=dt).year


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
