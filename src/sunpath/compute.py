"""Sun computation layer — geocoding plus the bundle of sun data handed to renderers."""

import os
from datetime import datetime

import httpx

from sunpath.clock import localize, longitude_tz
from sunpath.ephemeris import sun_position, sun_times
from sunpath.models import (
    GeoCoordinate,
    ObserverContext,
    QueryInput,
    Rectangle,
    SunPathData,
)
from sunpath.orientation import orientation_result
from sunpath.seasons import SeasonalTrajectoryCache, seasonal_trajectories
from sunpath.shadow import shadow_polygons
from sunpath.trajectory import DEFAULT_STEPS, sample_trajectory

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
USER_AGENT = "SunPath/1.0"

# 10 m x 8 m footprint centred on the observer
DEFAULT_HOUSE = Rectangle(center_x=0.0, center_y=0.0, width=10.0, depth=8.0)


class GeocodingError(Exception):
    """Geocoder call failure."""


def _geocode_nominatim(address: str) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {
        "Accept": "application/json",
        "User-Agent": os.environ.get("NOMINATIM_USER_AGENT", USER_AGENT),
    }
    resp = httpx.get(
        os.environ.get("NOMINATIM_URL", NOMINATIM_URL),
        params=params,
        headers=headers,
        timeout=10,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def geocode_address(address: str, when: str) -> ObserverContext:
    """Resolve an address string and time string to an ObserverContext.

    The time is read on the longitude clock of the resolved location
    (UTC + lng/15 hours), not the political timezone.

    Args:
        address: Address string in any language.
        when: Local time string in "YYYY-MM-DD HH:MM" format.

    Returns:
        ObserverContext containing the coordinate, UTC datetime, and normalized address.

    Raises:
        GeocodingError: When the address cannot be found.
        httpx.HTTPError: On network or HTTP status errors.
        ValueError: When `when` does not match the expected format.
    """
    result = _geocode_nominatim(address)
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    lat, lng, address_display = result

    dt = datetime.strptime(when, "%Y-%m-%d %H:%M")
    utc_dt = localize(dt, longitude_tz(lng))

    return ObserverContext(
        coord=GeoCoordinate(lat=lat, lng=lng),
        utc_dt=utc_dt,
        address_display=address_display,
    )


def compute_sun_path(
    context: ObserverContext,
    steps: int = DEFAULT_STEPS,
    house: Rectangle = DEFAULT_HOUSE,
    house_rotation_deg: float = 0.0,
    cache: SeasonalTrajectoryCache | None = None,
) -> SunPathData:
    """Compute every sun quantity for a context and return a SunPathData object.

    Day boundaries and trajectory sample times use the longitude clock.

    Args:
        context: Geocoding result (coordinate, UTC datetime).
        steps: Intervals per trajectory.
        house: Footprint for the shadow polygons.
        house_rotation_deg: Clockwise rotation of the footprint.
        cache: Optional caller-owned cache for the seasonal trajectories.

    Returns:
        SunPathData for renderers.
    """
    coord = context.coord
    clock = longitude_tz(coord.lng)
    day = context.utc_dt.astimezone(clock).date()

    position = sun_position(context.utc_dt, coord)
    if cache is not None:
        seasonal = cache.get(coord, day.year, steps, tz=clock)
    else:
        seasonal = seasonal_trajectories(coord, day.year, steps, tz=clock)

    return SunPathData(
        context=context,
        position=position,
        times=sun_times(day, coord),
        trajectory=sample_trajectory(day, coord, steps, tz=clock),
        seasonal=seasonal,
        orientation=orientation_result(coord, year=day.year),
        house=house,
        house_rotation_deg=house_rotation_deg,
        shadows=shadow_polygons(position, house, house_rotation_deg),
    )


def run(query: QueryInput, steps: int = DEFAULT_STEPS) -> SunPathData:
    """Top-level entry point: takes a QueryInput and returns a SunPathData.

    Args:
        query: User input (address, time string).
        steps: Intervals per trajectory.

    Returns:
        Fully computed SunPathData.
    """
    context = geocode_address(query.address, query.when)
    return compute_sun_path(context, steps=steps)
