"""
Unit tests for the geo math helpers.
"""

import pytest

from safe_route.core.geo import distance_km, meters_to_degrees, point_to_segment_distance
from safe_route.core.models import Coordinate

from conftest import END, MID, START


class TestDistanceKm:
    """Tests for haversine distance."""

    def test_same_point_returns_zero(self):
        p = Coordinate(lat=42.2808, lng=-83.7430)
        assert distance_km(p, p) == 0.0

    def test_symmetry(self):
        a = Coordinate(lat=42.2810, lng=-83.7480)
        b = Coordinate(lat=42.2830, lng=-83.7390)
        assert distance_km(a, b) == distance_km(b, a)

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is R * pi / 180 with R = 6371 km."""
        a = Coordinate(lat=0.0, lng=0.0)
        b = Coordinate(lat=1.0, lng=0.0)
        assert distance_km(a, b) == pytest.approx(111.195, abs=0.001)

    def test_distinct_points_are_positive(self):
        assert distance_km(START, END) > 0


class TestPointToSegmentDistance:
    """Tests for clamped corridor distance."""

    def test_degenerate_segment_is_point_distance(self):
        p = Coordinate(lat=42.29, lng=-83.74)
        assert point_to_segment_distance(p, START, START) == distance_km(p, START)

    def test_point_on_segment_is_zero(self):
        assert point_to_segment_distance(MID, START, END) == pytest.approx(0.0, abs=1e-9)

    def test_endpoint_is_zero(self):
        assert point_to_segment_distance(END, START, END) == pytest.approx(0.0, abs=1e-9)

    def test_perpendicular_foot(self):
        """A point north of the midpoint measures to the midpoint."""
        p = Coordinate(lat=42.29, lng=-83.74)
        expected = distance_km(p, MID)
        assert point_to_segment_distance(p, START, END) == pytest.approx(expected, rel=1e-6)

    def test_clamped_beyond_end(self):
        """Past the end the distance is to the end point, not the infinite line."""
        p = Coordinate(lat=42.28, lng=-83.70)
        assert point_to_segment_distance(p, START, END) == pytest.approx(distance_km(p, END), rel=1e-9)

    def test_clamped_before_start(self):
        p = Coordinate(lat=42.285, lng=-83.80)
        assert point_to_segment_distance(p, START, END) == pytest.approx(distance_km(p, START), rel=1e-9)

    def test_direction_does_not_matter(self):
        p = Coordinate(lat=42.283, lng=-83.745)
        assert point_to_segment_distance(p, START, END) == pytest.approx(
            point_to_segment_distance(p, END, START), rel=1e-9
        )


def test_meters_to_degrees():
    assert meters_to_degrees(111000) == 1.0
    assert meters_to_degrees(400, meters_per_degree=200) == 2.0
