"""Low-precision solar ephemeris — sun position and daily sun events.

Both queries go through the `suncalc` package (the SunCalc model: mean
anomaly, equation of centre, fixed obliquity, sidereal time), so the
position of the sun at any returned event time agrees with the event's
defining altitude to within the model's own accuracy.

Angles are radians. Azimuth is returned clockwise from true north.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime

import numpy as np
import pandas as pd
from pytz import utc
from suncalc import get_position, get_times

from sunpath.clock import as_utc, calendar_day
from sunpath.models import GeoCoordinate, SunPosition, SunTimes

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi

# Morning/evening pairs reported by suncalc.get_times
SUN_EVENTS: tuple[str, ...] = (
    "sunrise", "sunset",
    "sunrise_end", "sunset_start",
    "dawn", "dusk",
    "nautical_dawn", "nautical_dusk",
    "night_end", "night",
    "golden_hour_end", "golden_hour",
)


def _finite_pair(lat: object, lng: object) -> tuple[float, float] | None:
    try:
        lat_f = float(lat)  # type: ignore[arg-type]
        lng_f = float(lng)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        return None
    return lat_f, lng_f


def _valid_height(height: object) -> bool:
    if isinstance(height, bool) or not isinstance(height, (int, float)):
        return False
    return math.isfinite(height) and height >= 0


def _event_time(value: object) -> datetime | None:
    """suncalc event (Timestamp, datetime or NaT) to an aware UTC datetime."""
    if value is None or pd.isna(value):
        return None
    return as_utc(pd.Timestamp(value).round("us").to_pydatetime())


def sun_position(instant: datetime | float, coord: GeoCoordinate) -> SunPosition:
    """Sun azimuth/altitude for an instant and location.

    Non-numeric or non-finite coordinates, and values that are not an
    instant, do not raise: an error is logged and SunPosition(0, 0) (due
    north on the horizon) is returned.

    Args:
        instant: Aware datetime, naive UTC datetime or epoch seconds.
        coord: Observer location.

    Returns:
        SunPosition with azimuth in [0, 2π) clockwise from north.
    """
    pair = _finite_pair(coord.lat, coord.lng)
    if pair is None:
        logger.error("Invalid coordinates: lat=%r lng=%r", coord.lat, coord.lng)
        return SunPosition(azimuth=0.0, altitude=0.0)
    lat, lng = pair

    try:
        moment = as_utc(instant)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        logger.error("Invalid instant for sun position: %r (%s)", instant, e)
        return SunPosition(azimuth=0.0, altitude=0.0)

    position = get_position(moment, lng, lat)

    # suncalc azimuth is measured from south, westward; rotate to north-clockwise
    azimuth = (float(position["azimuth"]) + math.pi) % TWO_PI
    if azimuth >= TWO_PI:
        azimuth = 0.0
    return SunPosition(azimuth=azimuth, altitude=float(position["altitude"]))


def sun_times(
    day: date | datetime, coord: GeoCoordinate, height: float = 0.0
) -> SunTimes:
    """Sun events for one calendar day.

    A plain date is anchored at 12:00 UTC, which selects the solar day whose
    noon falls on that date at the location's longitude. A datetime is used
    as the anchor instant directly.

    Events the sun never reaches that day are None; solar_noon and nadir are
    always set for valid input. Bad coordinates, height or day are logged
    and give SunTimes(invalid=True) with every event None.
    """
    pair = _finite_pair(coord.lat, coord.lng)
    if pair is None:
        logger.error("Invalid coordinates: lat=%r lng=%r", coord.lat, coord.lng)
        return SunTimes(invalid=True)
    lat, lng = pair
    if not _valid_height(height):
        logger.error("Invalid observer height: %r", height)
        return SunTimes(invalid=True)

    try:
        if isinstance(day, datetime):
            anchor = as_utc(day)
        else:
            civil = calendar_day(day)
            anchor = utc.localize(datetime(civil.year, civil.month, civil.day, 12))
    except (TypeError, ValueError, OverflowError) as e:
        logger.error("Invalid day for sun times: %r (%s)", day, e)
        return SunTimes(invalid=True)

    # Events the sun never reaches come back as NaN hour angles
    with np.errstate(invalid="ignore"):
        events = get_times(anchor, lng, lat, height)

    return SunTimes(
        solar_noon=_event_time(events["solar_noon"]),
        nadir=_event_time(events["nadir"]),
        **{name: _event_time(events[name]) for name in SUN_EVENTS},
    )
