# tests/test_shadow.py

import logging
import math

import pytest

from sunpath.models import PointShadow, Rectangle, SunPosition
from sunpath.shadow import (
    casting_edges,
    point_shadow,
    rotate,
    shadow_direction,
    shadow_length,
    shadow_polygons,
    shadow_scale,
)


def _sun(azimuth_deg, altitude=0.5):
    return SunPosition(azimuth=math.radians(azimuth_deg), altitude=altitude)


@pytest.mark.parametrize("altitude", [0.0, -0.01, -math.pi / 2])
def test_no_shadow_when_sun_is_down(house, altitude):
    assert shadow_polygons(SunPosition(azimuth=1.0, altitude=altitude), house) == ()


def test_axis_aligned_polygon_count(house):
    for azimuth_deg in range(0, 360, 7):
        for altitude in (0.05, 0.5, 1.2):
            polygons = shadow_polygons(_sun(azimuth_deg, altitude), house)
            assert 1 <= len(polygons) <= 3


@pytest.mark.parametrize(
    "azimuth_deg, edges",
    [
        (180, ("north",)),  # Sun in the south, shadow to the north
        (0, ("south",)),
        (90, ("west",)),
        (270, ("east",)),
        (135, ("north", "west")),
        (225, ("east", "north")),
    ],
)
def test_edges_facing_away_from_the_sun(house, azimuth_deg, edges):
    polygons = shadow_polygons(_sun(azimuth_deg), house)
    assert tuple(sorted(p.edge for p in polygons)) == tuple(sorted(edges))


def test_shadow_direction_points_away_from_sun():
    dx, dy = shadow_direction(math.pi)  # Sun due south
    assert dx == pytest.approx(0, abs=1e-12)
    assert dy == pytest.approx(1)
    dx, dy = shadow_direction(math.pi / 2)  # Sun due east
    assert dx == pytest.approx(-1)
    assert dy == pytest.approx(0, abs=1e-12)


def test_polygon_geometry(house):
    sun = _sun(135, altitude=0.5)
    length = shadow_scale(0.5, house.nominal_size)
    dx, dy = shadow_direction(sun.azimuth)
    polygons = {p.edge: p for p in shadow_polygons(sun, house)}

    north = polygons["north"].points
    assert len(north) == 4
    assert north[0] == pytest.approx((5.0, 4.0))
    assert north[1] == pytest.approx((-5.0, 4.0))
    assert north[2] == pytest.approx((-5.0 + dx * length, 4.0 + dy * length))
    assert north[3] == pytest.approx((5.0 + dx * length, 4.0 + dy * length))
    # Shadow heads north-west
    assert dx < 0 < dy


def test_shadow_scale_bounds():
    base = 10.0
    assert shadow_scale(0.0, base) == pytest.approx(base / 1.5 * 3)
    assert shadow_scale(0.5, base) == pytest.approx(base / 1.5 * (1 - 0.5 / (math.pi / 2)) * 3)
    assert shadow_scale(math.pi / 2, base) == pytest.approx(base / 1.5 * 0.2)
    assert shadow_scale(1.5, base) == pytest.approx(base / 1.5 * 0.2)
    assert shadow_scale(0.1, base) > shadow_scale(1.0, base)


def test_base_length_override(house):
    sun = _sun(180)
    default = shadow_polygons(sun, house)[0].points
    doubled = shadow_polygons(sun, house, base_length=2 * house.nominal_size)[0].points
    assert doubled[2][1] - doubled[1][1] == pytest.approx(2 * (default[2][1] - default[1][1]))


def test_rotation_changes_casting_edge(house):
    # Rotated a quarter turn, the original west wall faces north
    polygons = shadow_polygons(_sun(180), house, rotation_deg=90)
    assert [p.edge for p in polygons] == ["west"]
    points = polygons[0].points
    assert points[0] == pytest.approx((4.0, 5.0))
    assert points[1] == pytest.approx((-4.0, 5.0))
    assert points[2][1] > 5.0 and points[3][1] > 5.0


def test_rotated_normals_not_raw_shadow_sign(house):
    # Sun due south: the raw shadow vector only points north, but a house
    # turned 45° has two walls facing away from the sun.
    assert casting_edges(math.pi, 0.0) == ("north",)
    assert sorted(casting_edges(math.pi, 45.0)) == ["north", "west"]
    assert len(shadow_polygons(_sun(180), house, rotation_deg=45)) == 2


def test_rotation_about_center():
    house = Rectangle(center_x=100.0, center_y=-50.0, width=4.0, depth=2.0)
    polygons = shadow_polygons(_sun(180), house, rotation_deg=360)
    assert polygons[0].points[0] == pytest.approx((102.0, -49.0))
    assert polygons[0].points[1] == pytest.approx((98.0, -49.0))


def test_rotate_clockwise():
    assert rotate(0.0, 1.0, 90) == pytest.approx((1.0, 0.0), abs=1e-12)
    assert rotate(1.0, 0.0, 90) == pytest.approx((0.0, -1.0), abs=1e-12)
    assert rotate(3.0, 4.0, 0) == (3.0, 4.0)


def test_non_finite_input_yields_no_shadow(house, caplog):
    with caplog.at_level(logging.WARNING, logger="sunpath.shadow"):
        assert shadow_polygons(SunPosition(azimuth=1.0, altitude=math.nan), house) == ()
        assert shadow_polygons(_sun(180), house, rotation_deg=math.inf) == ()
    assert "Non-finite" in caplog.text


def test_shadow_length():
    assert shadow_length(math.pi / 4) == pytest.approx(1.0)
    assert shadow_length(math.radians(30)) == pytest.approx(math.sqrt(3))
    assert shadow_length(0.0) == math.inf
    assert shadow_length(-0.3) == math.inf


def test_point_shadow():
    shadow = point_shadow(SunPosition(azimuth=math.pi / 2, altitude=math.pi / 4), height=2.0)
    assert shadow.length == pytest.approx(2.0)
    assert shadow.direction_deg == pytest.approx(270.0)

    night = point_shadow(SunPosition(azimuth=0.0, altitude=-0.2), height=0.0)
    assert night == PointShadow(length=math.inf, direction_deg=180.0)
