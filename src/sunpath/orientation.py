"""Recommended building orientation from a weighted sample of the year's sun directions."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from pytz import utc

from sunpath.clock import localize, longitude_tz
from sunpath.ephemeris import sun_position
from sunpath.models import GeoCoordinate, OrientationResult
from sunpath.trajectory import valid_coordinate

logger = logging.getLogger(__name__)

COMPASS_POINTS: tuple[tuple[str, float], ...] = (
    ("N", 0.0),
    ("NE", 45.0),
    ("E", 90.0),
    ("SE", 135.0),
    ("S", 180.0),
    ("SW", 225.0),
    ("W", 270.0),
    ("NW", 315.0),
)

WINTER_WEIGHT = 1.3
SUMMER_WEIGHT = 0.7
NEUTRAL_WEIGHT = 1.0

SAMPLE_HOURS = tuple(range(7, 18))  # 07:00 .. 17:00 inclusive
MIN_ALTITUDE = 0.1  # Radians; lower sun is ignored


@dataclass(frozen=True)
class SampleDate:
    month: int
    day: int
    leaning: str  # "summer", "winter" or "neutral", as seen from the northern hemisphere


SAMPLE_DATES: tuple[SampleDate, ...] = (
    SampleDate(3, 20, "neutral"),  # Spring equinox
    SampleDate(5, 6, "summer"),
    SampleDate(6, 21, "summer"),  # Summer solstice
    SampleDate(9, 22, "neutral"),  # Fall equinox
    SampleDate(11, 6, "winter"),
    SampleDate(12, 21, "winter"),  # Winter solstice
)


def season_weight(leaning: str, lat: float) -> float:
    """Winter sun counts more than summer sun; seasons flip south of the equator."""
    if leaning == "neutral":
        return NEUTRAL_WEIGHT
    winter = leaning == "winter"
    if lat < 0:
        winter = not winter
    return WINTER_WEIGHT if winter else SUMMER_WEIGHT


def morning_bias(lat: float) -> float:
    """Degrees of eastward correction: 15° at the equator, shrinking to 5° at the poles."""
    return 15 - (abs(lat) / 90) * 10


def optimal_orientation(
    coord: GeoCoordinate,
    year: int | None = None,
    sample_dates: Sequence[SampleDate] = SAMPLE_DATES,
) -> float:
    """Recommended facing angle in degrees, [0, 360), clockwise from north.

    Sun samples at clock hours 7-17 (longitude clock) on each sample date are
    weighted by season, sin(altitude) and closeness to noon. The raw result
    is the weighted mean of the directions opposite the sun, then shifted
    toward the morning side.

    Invalid coordinates log a warning and return due south.
    """
    if not valid_coordinate(coord):
        logger.warning("Invalid coordinates for orientation: lat=%r lng=%r", coord.lat, coord.lng)
        return 180.0
    if year is None:
        year = datetime.now(utc).year

    lat = coord.lat
    northern = lat >= 0
    clock = longitude_tz(coord.lng)

    weighted_sum = 0.0
    total_weight = 0.0
    for sample in sample_dates:
        weight_season = season_weight(sample.leaning, lat)
        for hour in SAMPLE_HOURS:
            instant = localize(datetime(year, sample.month, sample.day, hour), clock)
            position = sun_position(instant, coord)
            if position.altitude <= MIN_ALTITUDE:
                continue

            weight_altitude = math.sin(position.altitude)
            weight_time = 1 - abs(hour - 12) / 8
            weight = weight_season * weight_altitude * weight_time

            azimuth_deg = math.degrees(position.azimuth) % 360
            weighted_sum += ((azimuth_deg + 180) % 360) * weight
            total_weight += weight

    if total_weight == 0:
        raw = 180.0 if northern else 0.0
    else:
        raw = weighted_sum / total_weight

    adjustment = morning_bias(lat)
    angle = raw - adjustment if northern else raw + adjustment
    angle %= 360
    return 0.0 if angle >= 360 else angle


def compass_label(angle_deg: float) -> str:
    """Nearest of the eight compass points, by angular distance."""
    # Distance wraps through north: 338° is 22° from N and 23° from NW
    angle = angle_deg % 360
    best_label, best_diff = COMPASS_POINTS[0][0], math.inf
    for label, bearing in COMPASS_POINTS:
        diff = abs(angle - bearing)
        diff = min(diff, 360 - diff)
        if diff < best_diff:
            best_label, best_diff = label, diff
    return best_label


def orientation_result(coord: GeoCoordinate, year: int | None = None) -> OrientationResult:
    angle = optimal_orientation(coord, year=year)
    return OrientationResult(angle_deg=angle, compass_label=compass_label(angle))
