# tests/test_overlay.py

import math
from datetime import datetime

import pytest
from pytz import utc

from sunpath.models import GeoCoordinate, SunPosition, Trajectory, TrajectoryPoint
from sunpath.overlay import (
    METERS_PER_DEGREE,
    shadow_marker,
    sun_position_to_latlng,
    trajectory_overlay,
)

CENTER = GeoCoordinate(lat=60.0, lng=10.0)


def test_zenith_maps_to_center():
    point = sun_position_to_latlng(SunPosition(azimuth=1.0, altitude=math.pi / 2), CENTER)
    assert point.lat == pytest.approx(CENTER.lat)
    assert point.lng == pytest.approx(CENTER.lng)


def test_below_horizon_is_pinned_outside_the_rim():
    point = sun_position_to_latlng(SunPosition(azimuth=0.0, altitude=-0.3), CENTER, radius=1000)
    assert point.lat == pytest.approx(CENTER.lat + 1500 / METERS_PER_DEGREE)
    assert point.lng == pytest.approx(CENTER.lng)


def test_longitude_offset_scales_with_latitude():
    point = sun_position_to_latlng(SunPosition(azimuth=math.pi / 2, altitude=math.pi / 4), CENTER)
    # Halfway between horizon and zenith: 500 m east
    assert point.lat == pytest.approx(CENTER.lat, abs=1e-12)
    assert point.lng == pytest.approx(CENTER.lng + 500 / (METERS_PER_DEGREE * 0.5))


def _point(hour, altitude, azimuth=math.pi):
    return TrajectoryPoint(time=utc.localize(datetime(2024, 6, 21, hour)), azimuth=azimuth, altitude=altitude)


def test_trajectory_overlay_markers():
    trajectory = Trajectory(points=(_point(4, -0.01), _point(12, 1.0), _point(20, 0.0)))
    overlay = trajectory_overlay(trajectory, CENTER)
    assert len(overlay.path) == 3
    assert overlay.sunrise is None
    assert overlay.sunset == overlay.path[-1]


def test_trajectory_overlay_empty():
    overlay = trajectory_overlay(Trajectory(), CENTER)
    assert overlay.path == ()
    assert overlay.sunrise is None and overlay.sunset is None


def test_shadow_marker_points_away_from_sun_on_screen():
    # Sun due south: the shadow runs up the screen (north)
    marker = shadow_marker(SunPosition(azimuth=math.pi, altitude=math.pi / 4), origin=(50.0, 50.0))
    assert marker.length == pytest.approx(30.0)
    assert marker.start == (50.0, 50.0)
    assert marker.end == pytest.approx((50.0, 20.0))


def test_shadow_marker_is_capped_and_hidden_at_night():
    low = shadow_marker(SunPosition(azimuth=math.pi / 2, altitude=0.01))
    assert low.length == 100.0
    assert low.end == pytest.approx((-100.0, 0.0), abs=1e-9)
    assert shadow_marker(SunPosition(azimuth=0.0, altitude=0.0)) is None
