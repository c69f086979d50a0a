from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from safe_route.contracts.route_contract import GeocodeResult, RoutingResult
from safe_route.core.models import Coordinate


class RoutingEngine(ABC):
    """Turn an ordered list of points into a road-following polyline."""

    @abstractmethod
    def route(self, points: Sequence[Coordinate], profile: Optional[str] = None) -> RoutingResult:
        """Raises ``RoutingError`` when no route can be computed."""
        raise NotImplementedError


class Geocoder(ABC):
    """Resolve free text to coordinates."""

    @abstractmethod
    def geocode(self, query: str) -> List[GeocodeResult]:
        """Best match first; empty list when nothing matches."""
        raise NotImplementedError
