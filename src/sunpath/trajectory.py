"""Daily sun-path sampling.

A trajectory spans the daylight window of one calendar day on a wall clock
(the environment's local clock unless a tzinfo is given). Polar days are
sampled across a synthetic 24-hour window; polar nights yield no points.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, tzinfo

from sunpath.clock import clock_hours, localize, to_clock
from sunpath.ephemeris import sun_position, sun_times
from sunpath.models import (
    GeoCoordinate,
    Trajectory,
    TrajectoryPoint,
    TrajectoryStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 24


def valid_steps(steps: object) -> bool:
    return isinstance(steps, int) and not isinstance(steps, bool) and steps >= 1


def valid_coordinate(coord: GeoCoordinate) -> bool:
    return all(
        isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)
        for v in (coord.lat, coord.lng)
    )


def _civil_day(day: date | datetime, tz: tzinfo | None) -> date:
    if isinstance(day, datetime):
        if day.tzinfo is not None and day.utcoffset() is not None:
            return to_clock(day, tz).date()
        return day.date()
    if isinstance(day, date):
        return day
    raise TypeError(f"Not a date: {day!r}")


def sample_trajectory(
    day: date | datetime,
    coord: GeoCoordinate,
    steps: int = DEFAULT_STEPS,
    tz: tzinfo | None = None,
) -> Trajectory:
    """Sample the sun path across one day's daylight window.

    Never raises for bad input: the returned Trajectory carries a status
    explaining an empty or partial result.

    Args:
        day: Calendar day. A datetime is reduced to its date on the `tz` clock.
        coord: Observer location.
        steps: Number of equal intervals; at most steps + 1 points are returned.
        tz: Wall clock used for the day boundary and the sample times.
            None means the environment's local clock.

    Returns:
        Trajectory in chronological order, window ends included.
    """
    if not valid_steps(steps):
        logger.warning("Invalid step count for trajectory: %r", steps)
        return Trajectory(status=TrajectoryStatus.INVALID_INPUT, reason=f"invalid steps: {steps!r}")
    if not valid_coordinate(coord):
        logger.warning("Invalid coordinates for trajectory: lat=%r lng=%r", coord.lat, coord.lng)
        return Trajectory(
            status=TrajectoryStatus.INVALID_INPUT,
            reason=f"invalid coordinates: lat={coord.lat!r} lng={coord.lng!r}",
        )
    try:
        civil = _civil_day(day, tz)
        times = sun_times(civil, coord)
    except (TypeError, ValueError, OverflowError) as e:
        logger.warning("Invalid date for trajectory: %r (%s)", day, e)
        return Trajectory(status=TrajectoryStatus.INVALID_INPUT, reason=f"invalid date: {day!r}")

    if times.invalid:
        return Trajectory(status=TrajectoryStatus.INVALID_INPUT, reason=f"invalid date: {day!r}")

    sunrise, sunset = times.sunrise, times.sunset
    if sunrise is None or sunset is None:
        noon = sun_position(times.solar_noon, coord)
        if noon.altitude <= 0:
            return Trajectory(
                status=TrajectoryStatus.POLAR_NIGHT,
                reason="sun stays below the horizon all day",
            )
        return _sample_window(
            civil, coord, 0.0, 24.0, steps, tz, TrajectoryStatus.POLAR_DAY
        )

    sunrise_hour = clock_hours(sunrise, tz)
    sunset_hour = clock_hours(sunset, tz)
    if sunset_hour < sunrise_hour:
        sunset_hour += 24  # Daylight window crosses midnight on this clock
    return _sample_window(
        civil, coord, sunrise_hour, sunset_hour, steps, tz, TrajectoryStatus.OK
    )


def _sample_window(
    civil: date,
    coord: GeoCoordinate,
    start_hour: float,
    end_hour: float,
    steps: int,
    tz: tzinfo | None,
    status: TrajectoryStatus,
) -> Trajectory:
    """Evaluate steps + 1 evenly spaced clock hours in [start_hour, end_hour]."""
    hour_range = end_hour - start_hour
    if hour_range <= 0:
        logger.warning(
            "Degenerate trajectory window on %s: start=%.3f end=%.3f",
            civil, start_hour, end_hour,
        )
        return Trajectory(
            status=TrajectoryStatus.DEGENERATE_WINDOW,
            reason=f"non-positive hour range {hour_range:.3f}",
            start_hour=start_hour,
            end_hour=end_hour,
        )

    step_size = hour_range / steps
    midnight = datetime(civil.year, civil.month, civil.day)
    points: list[TrajectoryPoint] = []
    for i in range(steps + 1):
        hour = start_hour + i * step_size
        day_offset, wall_hour = divmod(hour, 24)
        wall = midnight + timedelta(days=int(day_offset), seconds=round(wall_hour * 3600))
        try:
            instant = localize(wall, tz)
            position = sun_position(instant, coord)
        except Exception:
            # Wall times skipped or repeated by a DST change raise here
            logger.warning("Skipping trajectory point at %s", wall, exc_info=True)
            continue
        points.append(
            TrajectoryPoint(time=instant, azimuth=position.azimuth, altitude=position.altitude)
        )

    return Trajectory(
        points=tuple(points),
        status=status,
        start_hour=start_hour,
        end_hour=end_hour,
    )
