"""Great-circle and corridor distance helpers."""
from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from shapely.geometry import LineString, Point

from safe_route.core.models import Coordinate

EARTH_RADIUS_KM = 6371.0

# Rough metres per degree; only holds near the mid latitudes at city scale
METERS_PER_DEGREE = 111000.0


def distance_km(p1: Coordinate, p2: Coordinate) -> float:
    """Haversine distance in kilometres between two WGS-84 points."""
    lat1r, lng1r, lat2r, lng2r = map(radians, [p1.lat, p1.lng, p2.lat, p2.lng])
    dlat = lat2r - lat1r
    dlng = lng2r - lng1r
    a = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlng / 2) ** 2
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))


def point_to_segment_distance(point: Coordinate, seg_start: Coordinate, seg_end: Coordinate) -> float:
    """
    Distance in km from *point* to the closest point of the segment.

    The foot of the perpendicular is found in plain degree space (fine for
    short, city-scale segments) and clamped to the segment ends; the final
    distance is measured with the haversine formula.
    """
    if seg_start == seg_end:
        return distance_km(point, seg_start)

    seg = LineString([(seg_start.lng, seg_start.lat), (seg_end.lng, seg_end.lat)])
    # normalized projection is the dot-product parameter clamped to [0, 1]
    t = seg.project(Point(point.lng, point.lat), normalized=True)
    foot = Coordinate(
        lat=seg_start.lat + t * (seg_end.lat - seg_start.lat),
        lng=seg_start.lng + t * (seg_end.lng - seg_start.lng),
    )
    return distance_km(point, foot)


def meters_to_degrees(meters: float, meters_per_degree: float = METERS_PER_DEGREE) -> float:
    return meters / meters_per_degree
