"""
Calendar windows in a user's timezone.

Every boundary is computed on the local wall clock (IANA zone rules via
zoneinfo) and converted back to UTC, so days that are 23 or 25 hours long
around DST transitions still start and end at local midnight.

Instants are aware UTC datetimes. A naive value is taken to be UTC already
(SQLite hands stored timestamps back without a tzinfo).
"""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import NamedTuple, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

UTC = timezone.utc

# Index 0 is Sunday, matching the week start used for weekly windows.
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(dt: datetime) -> datetime:
    """Aware UTC datetime. Naive values are taken to already be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


class ResolvedZone(NamedTuple):
    name: str
    zone: tzinfo
    requested: Optional[str]
    fell_back: bool


class Window(NamedTuple):
    """[start, end) in UTC."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= as_utc(instant) < self.end


def resolve_timezone(name: Optional[str], default: str = "UTC") -> ResolvedZone:
    """
    Look up an IANA timezone. Empty names use `default`; names the zone
    database does not know are replaced by UTC and logged.
    """
    candidate = (name or "").strip() or default
    try:
        return ResolvedZone(candidate, ZoneInfo(candidate), name, False)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning("Unknown timezone %r, falling back to UTC", candidate)
        return ResolvedZone("UTC", ZoneInfo("UTC"), name, True)


def is_known_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def local_date(zone: tzinfo, instant: Optional[datetime] = None) -> date:
    """Civil date in `zone` at `instant` (default: now)."""
    instant = instant if instant is not None else utcnow()
    return as_utc(instant).astimezone(zone).date()


def local_weekday(zone: tzinfo, instant: datetime) -> int:
    """Civil weekday in `zone`, Sunday=0 .. Saturday=6."""
    return (as_utc(instant).astimezone(zone).weekday() + 1) % 7


def local_midnight(zone: tzinfo, day: date) -> datetime:
    """UTC instant of 00:00 local time on `day`."""
    local = datetime.combine(day, time.min, tzinfo=zone)
    return as_utc(local)


def local_range_window(zone: tzinfo, first_day: date, last_day: date) -> Window:
    """Window covering the civil dates first_day..last_day inclusive."""
    return Window(
        local_midnight(zone, first_day),
        local_midnight(zone, last_day + timedelta(days=1)),
    )


def local_date_window(zone: tzinfo, day: date) -> Window:
    return local_range_window(zone, day, day)


def day_window(zone: tzinfo, when: Union[date, datetime, None] = None) -> Window:
    """
    The civil day containing `when`. A datetime is treated as an instant and
    converted to `zone`; a plain date is taken as the civil date itself.
    """
    if when is None or isinstance(when, datetime):
        day = local_date(zone, when)
    else:
        day = when
    return local_date_window(zone, day)


def week_window(zone: tzinfo, now: Optional[datetime] = None) -> Window:
    """Seven civil days starting on the Sunday of the current local week."""
    today = local_date(zone, now)
    sunday = today - timedelta(days=(today.weekday() + 1) % 7)
    return local_range_window(zone, sunday, sunday + timedelta(days=6))
