"""Geocode-then-route orchestration.

A single planning run walks a fixed sequence of states:

    IDLE -> GEOCODING_END -> GEOCODING_START (only if needed) -> ROUTING -> DONE

and any step may drop into FAILED.

The destination is always resolved first. The start comes from, in order:
the device's current position, an explicit coordinate, or a geocoded text
query. Every failure surfaces as a ``SafeRouteError`` whose ``user_message``
can be shown as-is.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Type, Union

from safe_route.core.engine import run_engine
from safe_route.core.geo import METERS_PER_DEGREE
from safe_route.core.hazards import HazardIndex
from safe_route.core.models import Coordinate, SafeRoute
from safe_route.errors import (
    DestinationNotFoundError,
    GeocodingError,
    MissingDestinationError,
    SafeRouteError,
    StartNotFoundError,
    StartUnavailableError,
)
from safe_route.providers.base import Geocoder, RoutingEngine

log = logging.getLogger(__name__)

# Placeholder the UI puts in the start box when using device location
CURRENT_LOCATION = "Current Location"

Place = Union[str, Coordinate, None]


class PlanState(str, Enum):
    IDLE = "idle"
    GEOCODING_END = "geocoding_end"
    GEOCODING_START = "geocoding_start"
    ROUTING = "routing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PlanOutcome:
    route: SafeRoute
    message: str
    history: List[PlanState] = field(default_factory=list)


class RoutePlanner:
    def __init__(
        self,
        index: HazardIndex,
        router: RoutingEngine,
        geocoder: Geocoder,
        *,
        profile: Optional[str] = None,
        meters_per_degree: float = METERS_PER_DEGREE,
    ):
        self.index = index
        self.router = router
        self.geocoder = geocoder
        self.profile = profile
        self.meters_per_degree = meters_per_degree
        self.state = PlanState.IDLE
        self.history: List[PlanState] = [PlanState.IDLE]

    def _enter(self, state: PlanState) -> None:
        log.debug("planner: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _resolve(self, query: str, not_found: Type[GeocodingError]) -> Coordinate:
        results = self.geocoder.geocode(query)
        if not results:
            raise not_found(f"No geocoding result for {query!r}")
        best = results[0]
        log.info("Resolved %r -> (%.5f, %.5f) %s", query, best.location.lat, best.location.lng, best.label)
        return best.location

    def plan(
        self,
        end: Place,
        start: Place = None,
        current_position: Optional[Coordinate] = None,
    ) -> PlanOutcome:
        self.state = PlanState.IDLE
        self.history = [PlanState.IDLE]

        try:
            if end is None or (isinstance(end, str) and not end.strip()):
                raise MissingDestinationError()

            self._enter(PlanState.GEOCODING_END)
            end_coord = end if isinstance(end, Coordinate) else self._resolve(end.strip(), DestinationNotFoundError)

            if current_position is not None:
                start_coord = current_position
            elif isinstance(start, Coordinate):
                start_coord = start
            elif isinstance(start, str) and start.strip() and start.strip() != CURRENT_LOCATION:
                self._enter(PlanState.GEOCODING_START)
                start_coord = self._resolve(start.strip(), StartNotFoundError)
            else:
                raise StartUnavailableError()

            self._enter(PlanState.ROUTING)
            route = run_engine(
                start_coord,
                end_coord,
                self.index,
                self.router,
                profile=self.profile,
                meters_per_degree=self.meters_per_degree,
            )
        except SafeRouteError as e:
            self._enter(PlanState.FAILED)
            log.warning("Planning failed: %s", e.detail)
            raise

        self._enter(PlanState.DONE)
        message = f"Safest route found! Safety score: {route.assessment.score}/100"
        log.info(message)
        return PlanOutcome(route=route, message=message, history=list(self.history))
