"""Instant and calendar helpers, plus the longitude-based local clock.

The local clock used throughout is an approximation: 15° of longitude is
taken as one hour of offset from UTC. No timezone database is consulted.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, tzinfo

from pytz import FixedOffset, utc

HOURS_PER_DEGREE = 1 / 15

NOT_AVAILABLE = "N/A"


def as_utc(instant: datetime | float | int) -> datetime:
    """Normalise an instant to an aware UTC datetime.

    Naive datetimes and epoch seconds are interpreted as UTC.

    Raises:
        TypeError: If the value is not a datetime or a number.
        ValueError: If an epoch value is not finite or out of range.
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None or instant.utcoffset() is None:
            return utc.localize(instant)
        return instant.astimezone(utc)
    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        raise TypeError(f"Not an instant: {instant!r}")
    if not math.isfinite(instant):
        raise ValueError(f"Non-finite epoch value: {instant}")
    return datetime.fromtimestamp(instant, tz=utc)


def calendar_day(value: date | datetime) -> date:
    """Strip the time-of-day. Aware datetimes keep their own wall-clock date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Not a date: {value!r}")


def longitude_offset_hours(lng: float) -> float:
    return lng * HOURS_PER_DEGREE


def longitude_tz(lng: float) -> tzinfo:
    """Fixed-offset zone approximating local time at a longitude (whole minutes)."""
    return FixedOffset(round(longitude_offset_hours(lng) * 60))


def localize(naive: datetime, tz: tzinfo | None = None) -> datetime:
    """Attach a clock to a naive wall-clock time and return the UTC instant.

    tz=None uses the environment's local clock. pytz zones are localized with
    is_dst=None, so wall times skipped or repeated by a DST change raise
    pytz.exceptions.NonExistentTimeError / AmbiguousTimeError.
    """
    if tz is None:
        return naive.astimezone(utc)
    localize_fn = getattr(tz, "localize", None)
    if localize_fn is not None:
        return localize_fn(naive, is_dst=None).astimezone(utc)
    return naive.replace(tzinfo=tz).astimezone(utc)


def to_clock(instant: datetime, tz: tzinfo | None = None) -> datetime:
    """Express an instant on a wall clock (environment local clock when tz is None)."""
    instant = as_utc(instant)
    return instant.astimezone() if tz is None else instant.astimezone(tz)


def clock_hours(instant: datetime, tz: tzinfo | None = None) -> float:
    """Fractional wall-clock hour of an instant, in [0, 24)."""
    local = to_clock(instant, tz)
    return local.hour + local.minute / 60 + local.second / 3600


def day_of_year_to_date(day: int, year: int) -> date:
    """Day 1 is January 1. Values past the end of the year roll into the next."""
    return date(year, 1, 1) + timedelta(days=day - 1)


def date_to_day_of_year(value: date | datetime) -> int:
    return calendar_day(value).timetuple().tm_yday


def format_time(instant: datetime | float | int | None, lng: float | None = None) -> str:
    """Format an instant as "HH:MM" (24-hour).

    Without a longitude the environment's local clock is used. With one,
    lng/15 hours are added to the UTC time, wrapping across midnight.
    Anything that cannot be read as an instant formats as "N/A".
    """
    if instant is None:
        return NOT_AVAILABLE
    try:
        utc_dt = as_utc(instant)
    except (TypeError, ValueError, OverflowError, OSError):
        return NOT_AVAILABLE

    if lng is None:
        return utc_dt.astimezone().strftime("%H:%M")
    if not isinstance(lng, (int, float)) or not math.isfinite(lng):
        return NOT_AVAILABLE
    try:
        local = utc_dt + timedelta(hours=longitude_offset_hours(lng))
    except OverflowError:
        return NOT_AVAILABLE
    return local.strftime("%H:%M")
