from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from safe_route.contracts.route_contract import GeocodeResult, RoutingResult
from safe_route.core.geo import distance_km
from safe_route.core.models import Coordinate
from safe_route.errors import RoutingError
from safe_route.providers.base import Geocoder, RoutingEngine


class StraightLineRouter(RoutingEngine):
    """
    Deterministic offline router so the pipeline runs end-to-end without APIs.
    Joins the requested points with straight legs, densified to roughly one
    vertex every *step_m* metres, at a constant speed.
    """

    def __init__(self, step_m: float = 25.0, speed_mps: float = 8.33, fail: bool = False):
        self.step_m = step_m
        self.speed_mps = speed_mps
        self.fail = fail
        self.calls: List[List[Coordinate]] = []

    def route(self, points: Sequence[Coordinate], profile: Optional[str] = None) -> RoutingResult:
        self.calls.append(list(points))
        if self.fail:
            raise RoutingError("mock router configured to fail")
        if len(points) < 2:
            raise RoutingError(f"Need at least 2 points to route, got {len(points)}")

        out: List[Coordinate] = [points[0]]
        total_m = 0.0
        for a, b in zip(points[:-1], points[1:]):
            leg_m = distance_km(a, b) * 1000.0
            total_m += leg_m
            n = max(1, int(leg_m // self.step_m))
            for k in range(1, n):
                u = k / n
                out.append(Coordinate(lat=a.lat + u * (b.lat - a.lat), lng=a.lng + u * (b.lng - a.lng)))
            out.append(b)

        return RoutingResult(
            coordinates=out,
            distance_m=total_m,
            duration_s=total_m / max(0.1, self.speed_mps),
            profile=profile or "straight",
            meta={"router": "mock"},
        )


class StaticGeocoder(Geocoder):
    """Lookup table geocoder; also accepts literal ``"lat,lng"`` queries."""

    def __init__(self, places: Optional[Mapping[str, Coordinate]] = None):
        self.places: Dict[str, Coordinate] = {
            k.strip().lower(): v for k, v in (places or {}).items()
        }
        self.queries: List[str] = []

    def geocode(self, query: str) -> List[GeocodeResult]:
        self.queries.append(query)
        q = (query or "").strip()
        hit = self.places.get(q.lower())
        if hit is not None:
            return [GeocodeResult(location=hit, label=q)]
        try:
            return [GeocodeResult(location=Coordinate.parse(q), label=q)]
        except ValueError:
            return []
