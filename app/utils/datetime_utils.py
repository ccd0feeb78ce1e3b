"""
Timezone-aware datetime helpers.
- Store and compute in UTC in DB.
- API responses expose datetimes as ISO-8601 with Z.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

UTC = timezone.utc


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """If dt is naive, treat as UTC and return timezone-aware UTC. If already aware, convert to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)
    return dt


def iso_8601_utc(dt: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with Z for UTC."""
    if dt is None:
        return None
    s = ensure_utc(dt).isoformat()
    if s.endswith("+00:00"):
        s = s[:-6] + "Z"
    return s


def start_of_day(dt: datetime) -> datetime:
    dt = ensure_utc(dt)
    return datetime.combine(dt.date(), time.min, tzinfo=UTC)


def start_of_week(dt: datetime) -> datetime:
    """Monday 00:00 UTC of the week containing dt."""
    day = start_of_day(dt)
    return day - timedelta(days=day.weekday())


def start_of_month(dt: datetime) -> datetime:
    dt = ensure_utc(dt)
    return datetime.combine(date(dt.year, dt.month, 1), time.min, tzinfo=UTC)


def end_of_day(d: date) -> datetime:
    """Last representable instant of a calendar day, for inclusive upper bounds."""
    return datetime.combine(d, time.max, tzinfo=UTC)
