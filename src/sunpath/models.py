"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer location in decimal degrees."""

    lat: float  # Latitude, [-90, 90]
    lng: float  # Longitude, [-180, 180], positive East


@dataclass(frozen=True)
class SunPosition:
    """Apparent sun direction for one instant and place."""

    azimuth: float  # Radians, [0, 2π), clockwise from true north
    altitude: float  # Radians, [-π/2, π/2]; <= 0 means below the horizon

    @property
    def above_horizon(self) -> bool:
        return self.altitude > 0


@dataclass(frozen=True)
class SunTimes:
    """Named sun events for one calendar day at one location.

    Every event except solar_noon and nadir is None when the sun never
    reaches the corresponding altitude that day (polar day or night).
    `invalid` marks a result for unusable input: every event is None.
    """

    solar_noon: datetime | None = None
    nadir: datetime | None = None
    sunrise: datetime | None = None  # Top edge on the horizon (-0.833°)
    sunset: datetime | None = None
    sunrise_end: datetime | None = None  # Bottom edge on the horizon (-0.3°)
    sunset_start: datetime | None = None
    dawn: datetime | None = None  # Civil twilight (-6°)
    dusk: datetime | None = None
    nautical_dawn: datetime | None = None  # Nautical twilight (-12°)
    nautical_dusk: datetime | None = None
    night_end: datetime | None = None  # Astronomical twilight (-18°)
    night: datetime | None = None
    golden_hour_end: datetime | None = None  # Sun at +6°
    golden_hour: datetime | None = None
    invalid: bool = False

    @property
    def polar(self) -> bool:
        """True when sunrise or sunset does not occur on this day."""
        if self.invalid:
            return False
        return self.sunrise is None or self.sunset is None


@dataclass(frozen=True)
class TrajectoryPoint:
    """One sample of the sun path."""

    time: datetime  # UTC instant
    azimuth: float  # Radians, clockwise from north
    altitude: float  # Radians


class TrajectoryStatus(str, Enum):
    """Why a trajectory holds the points it holds."""

    OK = "ok"
    POLAR_DAY = "polar_day"  # No sunrise/sunset, sun up all day: synthetic 24h window
    POLAR_NIGHT = "polar_night"  # No sunrise/sunset, sun down all day: no points
    DEGENERATE_WINDOW = "degenerate_window"  # Non-positive hour range
    INVALID_INPUT = "invalid_input"  # Non-finite coordinate, bad date or step count
    FAILED = "failed"  # Unexpected error while computing


@dataclass(frozen=True)
class Trajectory:
    """Chronological sun path for one day. Read-only sequence of TrajectoryPoint."""

    points: tuple[TrajectoryPoint, ...] = ()
    status: TrajectoryStatus = TrajectoryStatus.OK
    reason: str = ""
    start_hour: float | None = None  # Window start, fractional clock hours
    end_hour: float | None = None  # Window end, may exceed 24 when crossing midnight

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[TrajectoryPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> TrajectoryPoint:
        return self.points[index]

    @property
    def degraded(self) -> bool:
        """True when the result is a fallback rather than a real daylight window."""
        return self.status not in (TrajectoryStatus.OK, TrajectoryStatus.POLAR_DAY)


@dataclass(frozen=True)
class SeasonalTrajectory:
    """Sun path on one of the fixed seasonal reference dates."""

    date: date
    label: str  # "Summer Solstice", ...
    color: str  # Display color (hex)
    trajectory: Trajectory

    @property
    def points(self) -> tuple[TrajectoryPoint, ...]:
        return self.trajectory.points


@dataclass(frozen=True)
class OrientationResult:
    """Recommended building facing direction."""

    angle_deg: float  # [0, 360), clockwise from north
    compass_label: str  # One of N, NE, E, SE, S, SW, W, NW


@dataclass(frozen=True)
class Rectangle:
    """House footprint, axis-aligned before rotation. Plane units: +x East, +y North."""

    center_x: float
    center_y: float
    width: float  # Extent along x
    depth: float  # Extent along y

    @property
    def nominal_size(self) -> float:
        return max(self.width, self.depth)


@dataclass(frozen=True)
class ShadowPolygon:
    """Shadow quadrilateral cast by one rectangle edge."""

    edge: str  # "north", "east", "south" or "west" (un-rotated edge name)
    points: tuple[tuple[float, float], ...]  # >= 3 vertices, in order


@dataclass(frozen=True)
class PointShadow:
    """Shadow of an upright object standing on a point."""

    length: float  # Same unit as height; inf when the sun is not up
    direction_deg: float  # Compass bearing the shadow points to, [0, 360)


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-form address string ("Eiffel Tower, Paris")
    when: str  # "YYYY-MM-DD HH:MM" local clock at the location


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + clock conversion. Input to sun computation."""

    coord: GeoCoordinate
    utc_dt: datetime  # UTC datetime (with tzinfo=utc)
    address_display: str  # Normalized address returned by geocoder (for display)


@dataclass(frozen=True)
class SunPathData:
    """The sole input to renderers. Fully computed state."""

    context: ObserverContext
    position: SunPosition
    times: SunTimes
    trajectory: Trajectory
    seasonal: Mapping[str, SeasonalTrajectory] | None  # None when unavailable
    orientation: OrientationResult
    house: Rectangle
    house_rotation_deg: float
    shadows: tuple[ShadowPolygon, ...]
