import pytest

from sunpath.clock import longitude_tz
from sunpath.models import GeoCoordinate, ObserverContext, Rectangle
from pytz import utc
from datetime import datetime


@pytest.fixture
def paris() -> GeoCoordinate:
    return GeoCoordinate(lat=48.8566, lng=2.3522)


@pytest.fixture
def paris_clock(paris):
    return longitude_tz(paris.lng)


@pytest.fixture
def tromso() -> GeoCoordinate:
    return GeoCoordinate(lat=69.6492, lng=18.9553)


@pytest.fixture
def equator() -> GeoCoordinate:
    return GeoCoordinate(lat=0.0, lng=0.0)


@pytest.fixture
def house() -> Rectangle:
    return Rectangle(center_x=0.0, center_y=0.0, width=10.0, depth=8.0)


@pytest.fixture
def paris_context(paris) -> ObserverContext:
    return ObserverContext(
        coord=paris,
        utc_dt=utc.localize(datetime(2024, 6, 21, 13, 0)),
        address_display="Paris, France",
    )
