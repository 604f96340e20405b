"""Sun paths on the solstice/equinox reference dates, and a caller-owned cache."""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, tzinfo
from types import MappingProxyType

from sunpath.models import GeoCoordinate, SeasonalTrajectory, Trajectory, TrajectoryStatus
from sunpath.trajectory import DEFAULT_STEPS, sample_trajectory, valid_coordinate, valid_steps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Season:
    key: str
    label: str
    month: int
    day: int
    color: str


# Fixed calendar dates; the true astronomical instants drift by up to a day.
SEASONS: tuple[Season, ...] = (
    Season("summer_solstice", "Summer Solstice", 6, 21, "#ff9800"),
    Season("winter_solstice", "Winter Solstice", 12, 21, "#2196f3"),
    Season("spring_equinox", "Spring Equinox", 3, 20, "#4caf50"),
    Season("fall_equinox", "Fall Equinox", 9, 22, "#a1662f"),
)

SeasonalTrajectories = Mapping[str, SeasonalTrajectory]


def _valid_year(year: object) -> bool:
    return isinstance(year, int) and not isinstance(year, bool) and date.min.year <= year <= date.max.year


def seasonal_trajectories(
    coord: GeoCoordinate,
    year: int,
    steps: int = DEFAULT_STEPS,
    tz: tzinfo | None = None,
) -> SeasonalTrajectories | None:
    """Compute the four seasonal sun paths for a location and year.

    Each season is computed on its own: a failure leaves that season with an
    empty, FAILED trajectory while the others are still returned.

    Args:
        coord: Observer location.
        year: Calendar year of the reference dates.
        steps: Intervals per trajectory.
        tz: Wall clock passed through to sample_trajectory.

    Returns:
        Read-only mapping keyed by season key, in SEASONS order, or None when
        the coordinate, year or step count is invalid or the whole
        computation fails.
    """
    if not (valid_coordinate(coord) and _valid_year(year) and valid_steps(steps)):
        logger.warning(
            "Invalid seasonal trajectory input: lat=%r lng=%r year=%r steps=%r",
            coord.lat, coord.lng, year, steps,
        )
        return None

    try:
        result: dict[str, SeasonalTrajectory] = {}
        for season in SEASONS:
            day = date(year, season.month, season.day)
            try:
                trajectory = sample_trajectory(day, coord, steps, tz=tz)
            except Exception as e:
                logger.exception("Failed to compute %s trajectory for %s", season.key, day)
                trajectory = Trajectory(status=TrajectoryStatus.FAILED, reason=str(e))
            result[season.key] = SeasonalTrajectory(
                date=day, label=season.label, color=season.color, trajectory=trajectory
            )
        return MappingProxyType(result)
    except Exception:
        logger.exception("Seasonal trajectory computation failed")
        return None


class SeasonalTrajectoryCache:
    """Memoizes seasonal_trajectories for nearby coordinates.

    Keys are (lat, lng) rounded to `precision` decimals plus year, step count
    and clock, so small coordinate jitter reuses the previous result. The
    owner decides the lifetime; nothing is shared between instances.
    """

    def __init__(self, precision: int = 2, maxsize: int = 32):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.precision = precision
        self.maxsize = maxsize
        self._entries: OrderedDict[tuple, SeasonalTrajectories] = OrderedDict()

    def key(
        self, coord: GeoCoordinate, year: int, steps: int, tz: tzinfo | None = None
    ) -> tuple:
        return (
            round(coord.lat, self.precision),
            round(coord.lng, self.precision),
            year,
            steps,
            tz,
        )

    def get(
        self,
        coord: GeoCoordinate,
        year: int,
        steps: int = DEFAULT_STEPS,
        tz: tzinfo | None = None,
    ) -> SeasonalTrajectories | None:
        """Return cached trajectories, computing them on a miss. None results are not cached."""
        if not valid_coordinate(coord):
            return seasonal_trajectories(coord, year, steps, tz=tz)

        key = self.key(coord, year, steps, tz)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            return cached

        result = seasonal_trajectories(coord, year, steps, tz=tz)
        if result is not None:
            self._entries[key] = result
            if len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
