"""Shared fixtures: a straight east-west corridor through Ann Arbor."""

import pytest

from safe_route.core.hazards import HazardIndex
from safe_route.core.models import Coordinate, HazardZone, SafeZone

LAT = 42.28
START = Coordinate(lat=LAT, lng=-83.75)
END = Coordinate(lat=LAT, lng=-83.73)
MID = Coordinate(lat=LAT, lng=-83.74)


def hazard(lat, lng, severity=4, radius=200.0, type="crime", description="hazard"):
    return HazardZone(lat=lat, lng=lng, type=type, severity=severity, description=description, radius=radius)


def safe_zone(lat, lng, radius=300.0, type="police", description="safe"):
    return SafeZone(lat=lat, lng=lng, type=type, description=description, radius=radius)


@pytest.fixture
def start():
    return START


@pytest.fixture
def end():
    return END


@pytest.fixture
def sample_index():
    return HazardIndex.sample()


@pytest.fixture
def midpoint_index():
    """One severe hazard sitting on the corridor midpoint."""
    return HazardIndex(
        [hazard(MID.lat, MID.lng, severity=5, radius=250.0, description="Recent incidents reported")],
        [],
    )
