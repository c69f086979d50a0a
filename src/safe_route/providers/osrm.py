from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import requests

from safe_route.cache.store import RouteCache
from safe_route.contracts.route_contract import RoutingResult
from safe_route.core.models import Coordinate
from safe_route.errors import RoutingError
from safe_route.providers.base import RoutingEngine
from safe_route.providers.http import HTTPClient

log = logging.getLogger(__name__)


def _coords_path(points: Sequence[Coordinate]) -> str:
    # OSRM wants lng,lat pairs separated by ';'
    return ";".join(f"{p.lng},{p.lat}" for p in points)


class OSRMRouter(RoutingEngine):
    """
    OSRM ``/route/v1`` client.

      GET {base_url}/{profile}/{lng,lat;lng,lat;...}
          ?overview=full&geometries=geojson&steps=false&alternatives=false

    Only the first route is used. Responses are cached in-process and, when
    configured, in Redis.
    """

    def __init__(
        self,
        base_url: str = "https://router.project-osrm.org/route/v1",
        profile: str = "driving",
        http: Optional[HTTPClient] = None,
        ttl_s: int = 3600,
    ):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.http = http or HTTPClient(user_agent="safe-route/0.1")
        self._cache = RouteCache(self.base_url, ttl_s)

    def _fetch(self, points: Sequence[Coordinate], profile: str) -> RoutingResult:
        url = f"{self.base_url}/{profile}/{_coords_path(points)}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "steps": "false",
            "alternatives": "false",
        }
        log.info("OSRM request: %d point(s), profile=%s", len(points), profile)
        try:
            data = self.http.get_json(url, params=params)
        except requests.HTTPError as e:
            # OSRM answers NoRoute / InvalidQuery with a 400 + JSON body
            code = None
            try:
                code = e.response.json().get("code")
            except (AttributeError, ValueError):
                pass
            raise RoutingError(f"OSRM HTTP error ({code or e}): {url}") from e
        except requests.RequestException as e:
            raise RoutingError(f"OSRM unreachable: {e}") from e

        code = (data or {}).get("code")
        routes = (data or {}).get("routes") or []
        if code != "Ok" or not routes:
            raise RoutingError(f"OSRM returned code={code!r} with {len(routes)} route(s)")

        best = routes[0]
        geometry = best.get("geometry") or {}
        coords: List[List[float]] = geometry.get("coordinates") or []
        return RoutingResult(
            coordinates=[Coordinate(lat=float(c[1]), lng=float(c[0])) for c in coords],
            distance_m=float(best.get("distance") or 0.0),
            duration_s=float(best.get("duration") or 0.0),
            profile=profile,
            meta={
                "snapped_waypoints": [
                    wp.get("location") for wp in (data.get("waypoints") or [])
                ],
            },
        )

    def route(self, points: Sequence[Coordinate], profile: Optional[str] = None) -> RoutingResult:
        if len(points) < 2:
            raise RoutingError(f"Need at least 2 points to route, got {len(points)}")
        prof = profile or self.profile

        result = self._cache.get(points, prof)
        if result is None:
            result = self._fetch(points, prof)
            self._cache.put(points, prof, result)

        log.info(
            "OSRM route: %.0f m, %.0f s, %d polyline point(s)",
            result.distance_m, result.duration_s, len(result.coordinates),
        )
        return result
