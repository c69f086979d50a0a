"""
Unit tests for the data model.
"""

import pytest
from pydantic import ValidationError

from safe_route.core.models import Coordinate, HazardZone, RouteAssessment, SafeRoute, SafeZone, Waypoint
from safe_route.errors import DestinationNotFoundError, GeocodingError, SafeRouteError


class TestCoordinate:
    def test_parse(self):
        assert Coordinate.parse("42.2808, -83.7430") == Coordinate(lat=42.2808, lng=-83.7430)

    @pytest.mark.parametrize("text", ["", "42.28", "a,b", "1,2,3"])
    def test_parse_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            Coordinate.parse(text)

    def test_hashable_value_type(self):
        a = Coordinate(lat=1.0, lng=2.0)
        assert {a, Coordinate(lat=1.0, lng=2.0)} == {a}

    def test_no_range_validation(self):
        assert Coordinate(lat=123.0, lng=-500.0).lat == 123.0


def test_waypoint_location():
    wp = Waypoint(lat=1.0, lng=2.0, priority=1)
    assert wp.location == Coordinate(lat=1.0, lng=2.0)


def test_safe_route_summary():
    route = SafeRoute(
        start=Coordinate(lat=0, lng=0),
        end=Coordinate(lat=0, lng=1),
        distance_m=1712.4,
        duration_s=205.9,
        assessment=RouteAssessment(score=88, label="safe"),
    )
    assert route.distance_km == 1.7
    assert route.duration_min == 3


def test_error_messages():
    err = DestinationNotFoundError("no hits for 'x'")
    assert isinstance(err, GeocodingError)
    assert isinstance(err, SafeRouteError)
    assert err.detail == "no hits for 'x'"
    assert err.user_message == "Destination not found. Please try a different address."
    assert str(SafeRouteError()) == SafeRouteError.user_message


@pytest.mark.parametrize("model, record", [
    (HazardZone, {"lat": 1.0, "lng": 2.0, "severity": 3, "radius": 100}),
    (SafeZone, {"lat": 1.0, "lng": 2.0, "radius": 100}),
])
def test_zone_type_is_required(model, record):
    with pytest.raises(ValidationError):
        model(**record)
