"""Map overlay coordinates for sun markers and sun paths.

Positions are projected onto a disc around the observer: the horizon is the
rim, the zenith is the centre. Metres are converted to degrees with a flat
111 111 m-per-degree approximation.

The Streamlit app draws `trajectory_overlay` and `sun_position_to_latlng`
on its map; `shadow_marker` is for map front ends that draw their own
screen-space shadow line.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sunpath.models import GeoCoordinate, SunPosition, Trajectory

METERS_PER_DEGREE = 111111
BELOW_HORIZON_FACTOR = 1.5


@dataclass(frozen=True)
class ShadowMarker:
    """Screen-space shadow line drawn from the sun marker (y axis points down)."""

    start: tuple[float, float]
    end: tuple[float, float]
    length: float


@dataclass(frozen=True)
class TrajectoryOverlay:
    path: tuple[GeoCoordinate, ...]
    sunrise: GeoCoordinate | None  # Only when the first point is at or above the horizon
    sunset: GeoCoordinate | None  # Only when the last point is at or above the horizon


def sun_position_to_latlng(
    position: SunPosition, center: GeoCoordinate, radius: float = 1000.0
) -> GeoCoordinate:
    """Project a sun position to a map coordinate `radius` metres around `center`."""
    if position.altitude <= 0:
        distance = radius * BELOW_HORIZON_FACTOR
    else:
        distance = radius * (1 - position.altitude / (math.pi / 2))

    dx = distance * math.sin(position.azimuth)
    dy = distance * math.cos(position.azimuth)
    lat_offset = dy / METERS_PER_DEGREE
    lng_offset = dx / (METERS_PER_DEGREE * math.cos(math.radians(center.lat)))
    return GeoCoordinate(lat=center.lat + lat_offset, lng=center.lng + lng_offset)


def trajectory_overlay(
    trajectory: Trajectory, center: GeoCoordinate, radius: float = 1000.0
) -> TrajectoryOverlay:
    path = tuple(
        sun_position_to_latlng(SunPosition(p.azimuth, p.altitude), center, radius)
        for p in trajectory
    )
    if not path:
        return TrajectoryOverlay(path=(), sunrise=None, sunset=None)
    first, last = trajectory[0], trajectory[-1]
    return TrajectoryOverlay(
        path=path,
        sunrise=path[0] if first.altitude >= 0 else None,
        sunset=path[-1] if last.altitude >= 0 else None,
    )


def shadow_marker(
    position: SunPosition,
    origin: tuple[float, float] = (0.0, 0.0),
    scale: float = 30.0,
    max_length: float = 100.0,
) -> ShadowMarker | None:
    """Shadow line from the sun marker at `origin`, or None when the sun is down."""
    if position.altitude <= 0:
        return None
    length = min(scale / math.tan(position.altitude), max_length)
    shadow_azimuth = position.azimuth + math.pi
    x, y = origin
    end = (x + length * math.sin(shadow_azimuth), y - length * math.cos(shadow_azimuth))
    return ShadowMarker(start=origin, end=end, length=length)
