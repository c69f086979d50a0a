from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Coordinate(BaseModel):
    """WGS-84 point in decimal degrees. Range is not validated."""

    model_config = {"frozen": True}

    lat: float
    lng: float

    @classmethod
    def parse(cls, text: str) -> Coordinate:
        """Parse ``"lat,lng"`` (whitespace tolerated)."""
        parts = [p.strip() for p in str(text).split(",")]
        if len(parts) != 2:
            raise ValueError(f"Expected 'lat,lng', got {text!r}")
        try:
            return cls(lat=float(parts[0]), lng=float(parts[1]))
        except ValueError:
            raise ValueError(f"Expected 'lat,lng', got {text!r}") from None


class HazardZone(BaseModel):
    model_config = {"frozen": True}

    lat: float
    lng: float
    type: Literal["crime", "lighting", "other"]
    severity: int  # 1..5
    description: str = ""
    radius: float  # metres

    @property
    def location(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)


class SafeZone(BaseModel):
    model_config = {"frozen": True}

    lat: float
    lng: float
    type: Literal["police", "busy", "campus"]
    description: str = ""
    radius: float  # metres

    @property
    def location(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)


class Waypoint(BaseModel):
    """Intermediate point spliced between start and end of a routing request.

    ``priority`` is informational (1 for safe-zone waypoints); ordering is
    always by distance from the start.
    """

    model_config = {"frozen": True}

    lat: float
    lng: float
    priority: Optional[int] = None

    @property
    def location(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)


class RouteAssessment(BaseModel):
    score: int = Field(description="0..100, higher is safer")
    label: Literal["safe", "caution", "unsafe"]
    total_risk: float = 0.0
    samples: int = 0
    reasons: List[str] = []


class SafeRoute(BaseModel):
    start: Coordinate
    end: Coordinate
    waypoints: List[Waypoint] = []
    coordinates: List[Coordinate] = []
    distance_m: float = 0.0
    duration_s: float = 0.0
    assessment: RouteAssessment

    @property
    def distance_km(self) -> float:
        return round(self.distance_m / 1000.0, 1)

    @property
    def duration_min(self) -> int:
        return int(round(self.duration_s / 60.0))
