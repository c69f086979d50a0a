"""Hazard Index: read-only hazard and safe-zone tables plus corridor filters.

The tables are loaded once and handed around by reference; nothing in here
mutates them. Filters are plain functions over sequences so callers with
ad-hoc lists (tests, API payloads) can use them without building an index.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from pydantic import BaseModel, ValidationError

from safe_route.core.geo import distance_km, point_to_segment_distance
from safe_route.core.models import Coordinate, HazardZone, SafeZone
from safe_route.errors import HazardDataError

log = logging.getLogger(__name__)

# Hazard influence + this buffer must reach the corridor to count
PATH_BUFFER_M = 100.0
# Safe zones closer than this to the corridor become waypoints
SAFE_ZONE_CORRIDOR_M = 500.0


# ---------------------------------------------------------------------------
# Built-in sample tables (Ann Arbor, MI)
# ---------------------------------------------------------------------------

SAMPLE_HAZARDS: Tuple[dict, ...] = (
    {"lat": 42.2810, "lng": -83.7480, "type": "crime", "severity": 4, "description": "High crime area", "radius": 200},
    {"lat": 42.2785, "lng": -83.7410, "type": "lighting", "severity": 3, "description": "Poorly lit street", "radius": 150},
    {"lat": 42.2830, "lng": -83.7390, "type": "crime", "severity": 5, "description": "Recent incidents reported", "radius": 250},
    {"lat": 42.2775, "lng": -83.7450, "type": "lighting", "severity": 2, "description": "Dim lighting", "radius": 100},
    {"lat": 42.2850, "lng": -83.7420, "type": "crime", "severity": 3, "description": "Moderate risk area", "radius": 180},
    {"lat": 42.2795, "lng": -83.7500, "type": "other", "severity": 4, "description": "Isolated area", "radius": 200},
    {"lat": 42.2820, "lng": -83.7350, "type": "lighting", "severity": 4, "description": "No street lights", "radius": 220},
    {"lat": 42.2760, "lng": -83.7380, "type": "crime", "severity": 2, "description": "Low risk area", "radius": 120},
)

SAMPLE_SAFE_ZONES: Tuple[dict, ...] = (
    {"lat": 42.2808, "lng": -83.7430, "type": "police", "description": "Police Station nearby", "radius": 300},
    {"lat": 42.2840, "lng": -83.7460, "type": "busy", "description": "Well-populated area", "radius": 250},
    {"lat": 42.2770, "lng": -83.7420, "type": "campus", "description": "University campus - well lit", "radius": 350},
)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def hazards_near_path(
    hazards: Iterable[HazardZone],
    start: Coordinate,
    end: Coordinate,
    buffer_m: float = PATH_BUFFER_M,
) -> List[HazardZone]:
    """Hazards whose radius plus *buffer_m* reaches the start-end corridor."""
    return [
        h for h in hazards
        if point_to_segment_distance(h.location, start, end) < (h.radius + buffer_m) / 1000.0
    ]


def safe_zones_near_path(
    zones: Iterable[SafeZone],
    start: Coordinate,
    end: Coordinate,
    max_distance_m: float = SAFE_ZONE_CORRIDOR_M,
) -> List[SafeZone]:
    return [
        z for z in zones
        if point_to_segment_distance(z.location, start, end) * 1000.0 < max_distance_m
    ]


def hazards_containing(hazards: Iterable[HazardZone], point: Coordinate) -> List[HazardZone]:
    return [h for h in hazards if distance_km(point, h.location) < h.radius / 1000.0]


def hazard_weight_at(hazards: Iterable[HazardZone], point: Coordinate) -> int:
    """Sum of severities of every hazard whose radius covers *point*."""
    return sum(h.severity for h in hazards_containing(hazards, point))


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

class _ZoneFile(BaseModel):
    hazards: List[HazardZone] = []
    safe_zones: List[SafeZone] = []


class HazardIndex:
    """Immutable hazard + safe-zone tables."""

    __slots__ = ("_hazards", "_safe_zones")

    def __init__(self, hazards: Sequence[HazardZone] = (), safe_zones: Sequence[SafeZone] = ()):
        self._hazards = tuple(hazards)
        self._safe_zones = tuple(safe_zones)

    @property
    def hazards(self) -> Tuple[HazardZone, ...]:
        return self._hazards

    @property
    def safe_zones(self) -> Tuple[SafeZone, ...]:
        return self._safe_zones

    def __len__(self) -> int:
        return len(self._hazards) + len(self._safe_zones)

    def __repr__(self) -> str:
        return f"HazardIndex(hazards={len(self._hazards)}, safe_zones={len(self._safe_zones)})"

    # ---- construction ----

    @classmethod
    def from_records(cls, hazards: Iterable[dict], safe_zones: Iterable[dict] = ()) -> HazardIndex:
        try:
            data = _ZoneFile(hazards=list(hazards), safe_zones=list(safe_zones))
        except ValidationError as e:
            raise HazardDataError(f"Invalid hazard records: {e}") from e
        return cls(data.hazards, data.safe_zones)

    @classmethod
    def from_file(cls, path) -> HazardIndex:
        """Load ``{"hazards": [...], "safe_zones": [...]}`` from a JSON file."""
        p = Path(path)
        if not p.exists():
            raise HazardDataError(f"Hazard file not found: {p}")
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise HazardDataError(f"Hazard file is not valid JSON: {p} ({e})") from e
        if not isinstance(raw, dict):
            raise HazardDataError(f"Hazard file must hold an object with 'hazards'/'safe_zones': {p}")
        return cls.from_records(raw.get("hazards", []), raw.get("safe_zones", []))

    @classmethod
    def sample(cls) -> HazardIndex:
        return cls.from_records(SAMPLE_HAZARDS, SAMPLE_SAFE_ZONES)

    # ---- lookups ----

    def hazards_near_path(self, start: Coordinate, end: Coordinate, buffer_m: float = PATH_BUFFER_M) -> List[HazardZone]:
        return hazards_near_path(self._hazards, start, end, buffer_m)

    def safe_zones_near_path(
        self, start: Coordinate, end: Coordinate, max_distance_m: float = SAFE_ZONE_CORRIDOR_M
    ) -> List[SafeZone]:
        return safe_zones_near_path(self._safe_zones, start, end, max_distance_m)

    def hazard_weight_at(self, point: Coordinate) -> int:
        return hazard_weight_at(self._hazards, point)


def load_index(settings) -> HazardIndex:
    """Build the process-wide index from settings (file if configured, else sample)."""
    if settings.hazard_file:
        index = HazardIndex.from_file(settings.hazard_file)
        log.info("Loaded %r from %s", index, settings.hazard_file)
    else:
        index = HazardIndex.sample()
        log.info("Loaded built-in sample %r", index)
    return index
