"""Waypoint synthesis: nudge a routing request around severe hazards."""
from __future__ import annotations

from math import sqrt
from typing import List, Optional, Sequence

from safe_route.core.geo import METERS_PER_DEGREE, distance_km, meters_to_degrees
from safe_route.core.hazards import hazard_weight_at, hazards_near_path, safe_zones_near_path
from safe_route.core.models import Coordinate, HazardZone, SafeZone, Waypoint

# Hazards below this severity never justify a detour
MIN_AVOID_SEVERITY = 3
# Clearance added to the hazard radius when placing an avoidance point
AVOIDANCE_BUFFER_M = 150.0
# Hard cap on intermediate waypoints handed to the routing engine
MAX_WAYPOINTS = 3


def avoidance_point(
    start: Coordinate,
    end: Coordinate,
    hazard: HazardZone,
    all_hazards: Sequence[HazardZone],
    meters_per_degree: float = METERS_PER_DEGREE,
) -> Optional[Waypoint]:
    """
    Point beside *hazard*, perpendicular to the start->end direction.

    Both sides are tried; the side covered by less total hazard severity
    (over *all_hazards*) wins, ties going to the left-hand side. Returns
    ``None`` when start and end coincide.
    """
    dx = end.lng - start.lng
    dy = end.lat - start.lat
    length = sqrt(dx * dx + dy * dy)
    if length == 0:
        return None

    perp_x = -dy / length  # lng component
    perp_y = dx / length   # lat component
    offset = meters_to_degrees(hazard.radius + AVOIDANCE_BUFFER_M, meters_per_degree)

    left = Waypoint(lat=hazard.lat + perp_y * offset, lng=hazard.lng + perp_x * offset)
    right = Waypoint(lat=hazard.lat - perp_y * offset, lng=hazard.lng - perp_x * offset)

    left_weight = hazard_weight_at(all_hazards, left.location)
    right_weight = hazard_weight_at(all_hazards, right.location)
    return left if left_weight <= right_weight else right


def synthesize_waypoints(
    start: Coordinate,
    end: Coordinate,
    hazards: Sequence[HazardZone],
    safe_zones: Sequence[SafeZone],
    *,
    meters_per_degree: float = METERS_PER_DEGREE,
) -> List[Waypoint]:
    """
    Ordered intermediate waypoints (at most ``MAX_WAYPOINTS``) for a route
    from *start* to *end*: one avoidance point per severe hazard touching
    the direct corridor, plus every safe zone near it. Sorted by distance
    from *start*.
    """
    if start == end:
        return []

    waypoints: List[Waypoint] = []

    path_hazards = hazards_near_path(hazards, start, end)
    # sorted() is stable, so equal severities keep table order
    path_hazards = sorted(path_hazards, key=lambda h: -h.severity)

    for hazard in path_hazards:
        if hazard.severity < MIN_AVOID_SEVERITY:
            continue
        wp = avoidance_point(start, end, hazard, hazards, meters_per_degree)
        if wp is not None:
            waypoints.append(wp)

    for zone in safe_zones_near_path(safe_zones, start, end):
        waypoints.append(Waypoint(lat=zone.lat, lng=zone.lng, priority=1))

    waypoints.sort(key=lambda wp: distance_km(start, wp.location))
    return waypoints[:MAX_WAYPOINTS]
