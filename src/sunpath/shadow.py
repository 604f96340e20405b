"""Shadow geometry for a rectangular footprint and for a single upright object.

Plane coordinates: +x is East, +y is North. Renderers drawing in screen
space (y down) flip the y axis themselves.
"""

from __future__ import annotations

import logging
import math

from sunpath.models import PointShadow, Rectangle, ShadowPolygon, SunPosition

logger = logging.getLogger(__name__)

MIN_LENGTH_FACTOR = 0.2
MAX_LENGTH_FACTOR = 4.0
LENGTH_DIVISOR = 1.5

# Dot products this close to zero count as edge-on to the sun
FACING_TOLERANCE = 1e-9

# (edge name, first corner, second corner, outward normal); corners in half-extents
_EDGES: tuple[tuple[str, tuple[int, int], tuple[int, int], tuple[float, float]], ...] = (
    ("south", (-1, -1), (1, -1), (0.0, -1.0)),
    ("east", (1, -1), (1, 1), (1.0, 0.0)),
    ("north", (1, 1), (-1, 1), (0.0, 1.0)),
    ("west", (-1, 1), (-1, -1), (-1.0, 0.0)),
)


def rotate(x: float, y: float, degrees: float) -> tuple[float, float]:
    """Rotate a vector clockwise (compass sense) by `degrees`."""
    theta = math.radians(degrees)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    return x * cos_t + y * sin_t, -x * sin_t + y * cos_t


def shadow_direction(azimuth: float) -> tuple[float, float]:
    """Unit vector pointing away from the sun.

    The (sin, cos) form takes an azimuth measured from south; the
    north-based azimuth is shifted by π first.
    """
    from_south = azimuth - math.pi
    return math.sin(from_south), math.cos(from_south)


def shadow_scale(altitude: float, base_length: float) -> float:
    """Projected shadow length: long near the horizon, short near the zenith, bounded."""
    factor = (1 - altitude / (math.pi / 2)) * 3
    factor = min(MAX_LENGTH_FACTOR, max(MIN_LENGTH_FACTOR, factor))
    return base_length / LENGTH_DIVISOR * factor


def casting_edges(azimuth: float, rotation_deg: float = 0.0) -> tuple[str, ...]:
    """Names of the un-rotated edges that face away from the sun."""
    dx, dy = shadow_direction(azimuth)
    sun_x, sun_y = -dx, -dy
    names = []
    for name, _, _, (nx, ny) in _EDGES:
        rx, ry = rotate(nx, ny, rotation_deg)
        if rx * sun_x + ry * sun_y < -FACING_TOLERANCE:
            names.append(name)
    return tuple(names)


def shadow_polygons(
    position: SunPosition,
    rectangle: Rectangle,
    rotation_deg: float = 0.0,
    base_length: float | None = None,
) -> tuple[ShadowPolygon, ...]:
    """Shadow quadrilaterals cast by the edges of a rotated rectangle.

    An edge casts a shadow when its rotated outward normal points away from
    the sun. Each polygon is the edge plus the same edge translated along the
    shadow direction by the shadow length.

    Args:
        position: Sun position; no shadows when altitude <= 0.
        rectangle: Footprint, axis-aligned before rotation.
        rotation_deg: Clockwise rotation about the rectangle's centre.
        base_length: Scale of the projected shadow; defaults to the
            rectangle's nominal size.

    Returns:
        One polygon per casting edge, in south/east/north/west edge order.
    """
    if not (math.isfinite(position.azimuth) and math.isfinite(position.altitude)):
        logger.warning("Non-finite sun position for shadows: %r", position)
        return ()
    if position.altitude <= 0:
        return ()
    if not math.isfinite(rotation_deg):
        logger.warning("Non-finite rotation for shadows: %r", rotation_deg)
        return ()

    if base_length is None:
        base_length = rectangle.nominal_size
    length = shadow_scale(position.altitude, base_length)
    dx, dy = shadow_direction(position.azimuth)
    offset_x, offset_y = dx * length, dy * length

    half_w, half_d = rectangle.width / 2, rectangle.depth / 2

    def corner(signs: tuple[int, int]) -> tuple[float, float]:
        rx, ry = rotate(signs[0] * half_w, signs[1] * half_d, rotation_deg)
        return rectangle.center_x + rx, rectangle.center_y + ry

    casting = set(casting_edges(position.azimuth, rotation_deg))
    polygons = []
    for name, first, second, _ in _EDGES:
        if name not in casting:
            continue
        a, b = corner(first), corner(second)
        polygons.append(
            ShadowPolygon(
                edge=name,
                points=(
                    a,
                    b,
                    (b[0] + offset_x, b[1] + offset_y),
                    (a[0] + offset_x, a[1] + offset_y),
                ),
            )
        )
    return tuple(polygons)


def shadow_length(altitude: float) -> float:
    """Shadow length of a unit-height upright object; inf when the sun is not up."""
    if altitude <= 0:
        return math.inf
    return 1 / math.tan(altitude)


def point_shadow(position: SunPosition, height: float = 1.0) -> PointShadow:
    """Length and compass bearing of the shadow of an upright object."""
    direction = (math.degrees(position.azimuth) + 180) % 360
    length = shadow_length(position.altitude)
    if math.isfinite(length):
        length *= height
    return PointShadow(length=length, direction_deg=direction)
