from __future__ import annotations

import logging
from typing import Optional

from safe_route.core.geo import METERS_PER_DEGREE
from safe_route.core.hazards import HazardIndex
from safe_route.core.models import Coordinate, SafeRoute
from safe_route.core.scoring import assess_route
from safe_route.core.waypoints import synthesize_waypoints
from safe_route.providers.base import RoutingEngine

log = logging.getLogger(__name__)


def run_engine(
    start: Coordinate,
    end: Coordinate,
    index: HazardIndex,
    router: RoutingEngine,
    *,
    profile: Optional[str] = None,
    meters_per_degree: float = METERS_PER_DEGREE,
) -> SafeRoute:
    # Bias the request away from hazards, then score whatever the engine returns
    waypoints = synthesize_waypoints(
        start, end, index.hazards, index.safe_zones, meters_per_degree=meters_per_degree
    )
    log.info("Synthesized %d waypoint(s) for %s -> %s", len(waypoints), start, end)

    result = router.route([start, *(wp.location for wp in waypoints), end], profile=profile)
    assessment = assess_route(result.coordinates, index.hazards, index.safe_zones)

    return SafeRoute(
        start=start,
        end=end,
        waypoints=waypoints,
        coordinates=result.coordinates,
        distance_m=result.distance_m,
        duration_s=result.duration_s,
        assessment=assessment,
    )
