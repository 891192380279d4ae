from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


UTC = timezone.utc


def utcnow() -> datetime:
    """
    Returns timezone-aware current UTC time.
    """
    return datetime.now(UTC)


def ensure_aware(dt: datetime, assume_utc: bool = True) -> datetime:
    """
    Ensure a datetime is timezone-aware. If naive and assume_utc is True,
    interpret as UTC; otherwise raise ValueError.
    """
    if dt.tzinfo is not None:
        return dt.astimezone(UTC)
    if assume_utc:
        return dt.replace(tzinfo=UTC)
    raise ValueError("Naive datetime provided and assume_utc=False")


def local_tz(name: Optional[str] = None) -> tzinfo:
    """
    The zone that defines a "school day". An empty name means the host's
    local zone.
    """
    if name:
        return ZoneInfo(name)
    return datetime.now().astimezone().tzinfo or UTC


def local_date(dt: datetime, tz: tzinfo) -> date:
    """
    Calendar date of `dt` in `tz`. Naive datetimes are taken as UTC, which is
    how they come back from SQLite.
    """
    return ensure_aware(dt).astimezone(tz).date()


def local_today(tz: tzinfo, *, now: Optional[datetime] = None) -> date:
    return local_date(now or utcnow(), tz)


def local_day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    Half-open [midnight, next midnight) window of `day` in `tz`, as UTC.
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def last_n_days(end: date, n: int = 7) -> list[date]:
    """
    `n` consecutive dates ending with `end`, oldest first.
    """
    return [end - timedelta(days=i) for i in range(n - 1, -1, -1)]
