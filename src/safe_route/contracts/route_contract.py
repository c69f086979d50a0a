# path: safe-route/src/safe_route/contracts/route_contract.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from safe_route.core.models import Coordinate


@dataclass(frozen=True)
class RoutingResult:
    coordinates: List[Coordinate]
    distance_m: float
    duration_s: float
    profile: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        """Compact JSON form for the route cache (``[lng, lat]`` pairs, like GeoJSON)."""
        return {
            "coordinates": [[c.lng, c.lat] for c in self.coordinates],
            "distance_m": self.distance_m,
            "duration_s": self.duration_s,
            "profile": self.profile,
            "meta": self.meta,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> RoutingResult:
        return cls(
            coordinates=[Coordinate(lat=float(lat), lng=float(lng)) for lng, lat in payload["coordinates"]],
            distance_m=float(payload["distance_m"]),
            duration_s=float(payload["duration_s"]),
            profile=payload.get("profile"),
            meta=dict(payload.get("meta") or {}),
        )


@dataclass(frozen=True)
class GeocodeResult:
    location: Coordinate
    label: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {"lat": self.location.lat, "lng": self.location.lng, "label": self.label}

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> GeocodeResult:
        return cls(
            location=Coordinate(lat=float(payload["lat"]), lng=float(payload["lng"])),
            label=str(payload.get("label") or ""),
        )
