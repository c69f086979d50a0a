"""FastAPI REST backend for hazard-aware routing."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from safe_route.config import settings
from safe_route.core.hazards import HazardIndex, load_index
from safe_route.core.models import (
    Coordinate,
    HazardZone,
    RouteAssessment,
    SafeRoute,
    SafeZone,
    Waypoint,
)
from safe_route.core.scoring import assess_route
from safe_route.core.waypoints import synthesize_waypoints
from safe_route.errors import (
    DestinationNotFoundError,
    GeocodingError,
    HazardDataError,
    MissingDestinationError,
    RoutingError,
    SafeRouteError,
    StartNotFoundError,
    StartUnavailableError,
)
from safe_route.planner import RoutePlanner
from safe_route.providers.factory import build_geocoder, build_router

log = logging.getLogger(__name__)

app = FastAPI(title="Safe Route", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Module-level singletons (index is read-only; provider L1 caches persist)
# ---------------------------------------------------------------------------
_singletons: Dict[str, Any] = {}


def get_index() -> HazardIndex:
    if "index" not in _singletons:
        try:
            _singletons["index"] = load_index(settings)
        except HazardDataError as e:
            # Not cached: the next request retries once the file is fixed
            log.error("Hazard index unavailable: %s", e.detail)
            raise HTTPException(status_code=500, detail=e.user_message)
    return _singletons["index"]


def get_planner(index: HazardIndex = Depends(get_index)) -> RoutePlanner:
    # A planner tracks per-run state, so each request gets its own
    if "router" not in _singletons:
        _singletons["router"] = build_router(settings.router, settings)
    if "geocoder" not in _singletons:
        _singletons["geocoder"] = build_geocoder(settings.geocoder, settings)
    return RoutePlanner(
        index,
        _singletons["router"],
        _singletons["geocoder"],
        profile=settings.osrm_profile,
        meters_per_degree=settings.meters_per_degree,
    )


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class ZoneOverrides(BaseModel):
    # When given, these replace the server's tables for this request only
    hazards: Optional[List[HazardZone]] = None
    safe_zones: Optional[List[SafeZone]] = None

    def resolve(self, index: HazardIndex) -> HazardIndex:
        if self.hazards is None and self.safe_zones is None:
            return index
        return HazardIndex(
            self.hazards if self.hazards is not None else index.hazards,
            self.safe_zones if self.safe_zones is not None else index.safe_zones,
        )


class WaypointsRequest(ZoneOverrides):
    start: Coordinate
    end: Coordinate


class WaypointsResponse(BaseModel):
    waypoints: List[Waypoint]


class ScoreRequest(ZoneOverrides):
    coordinates: List[Coordinate] = Field(default_factory=list)


class RouteRequest(BaseModel):
    end: Union[Coordinate, str, None] = None
    start: Union[Coordinate, str, None] = None
    current_position: Optional[Coordinate] = None
    profile: Optional[str] = None


class RouteResponse(BaseModel):
    message: str
    distance_km: float
    duration_min: int
    route: SafeRoute
    states: List[str] = []


class ZonesResponse(BaseModel):
    hazards: List[HazardZone]
    safe_zones: List[SafeZone]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health(index: HazardIndex = Depends(get_index)):
    redis_ok = False
    try:
        from safe_route.cache.redis_client import get_redis
        r = get_redis()
        if r is not None:
            r.ping()
            redis_ok = True
    except Exception as exc:
        log.debug("Redis health check failed: %s", exc)

    return {
        "status": "ok",
        "redis": redis_ok,
        "hazards": len(index.hazards),
        "safe_zones": len(index.safe_zones),
    }


@app.get("/zones", response_model=ZonesResponse)
def zones(index: HazardIndex = Depends(get_index)):
    return ZonesResponse(hazards=list(index.hazards), safe_zones=list(index.safe_zones))


@app.post("/waypoints", response_model=WaypointsResponse)
def waypoints(req: WaypointsRequest, index: HazardIndex = Depends(get_index)):
    idx = req.resolve(index)
    wps = synthesize_waypoints(
        req.start, req.end, idx.hazards, idx.safe_zones,
        meters_per_degree=settings.meters_per_degree,
    )
    return WaypointsResponse(waypoints=wps)


@app.post("/score", response_model=RouteAssessment)
def score(req: ScoreRequest, index: HazardIndex = Depends(get_index)):
    idx = req.resolve(index)
    return assess_route(req.coordinates, idx.hazards, idx.safe_zones)


_STATUS = (
    (MissingDestinationError, 422),
    (StartUnavailableError, 422),
    (DestinationNotFoundError, 404),
    (StartNotFoundError, 404),
    (GeocodingError, 502),
    (RoutingError, 502),
)


def _status_for(err: SafeRouteError) -> int:
    for cls, status in _STATUS:
        if isinstance(err, cls):
            return status
    return 500


@app.post("/route", response_model=RouteResponse)
def route(req: RouteRequest, planner: RoutePlanner = Depends(get_planner)):
    if req.profile:
        planner.profile = req.profile
    try:
        outcome = planner.plan(req.end, start=req.start, current_position=req.current_position)
    except SafeRouteError as e:
        raise HTTPException(status_code=_status_for(e), detail=e.user_message)

    r = outcome.route
    return RouteResponse(
        message=outcome.message,
        distance_km=r.distance_km,
        duration_min=r.duration_min,
        route=r,
        states=[s.value for s in outcome.history],
    )
