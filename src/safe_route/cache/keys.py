"""Redis key naming conventions for the safe-route cache layer."""
from __future__ import annotations

import hashlib
from typing import Sequence

from safe_route.core.models import Coordinate

_PREFIX = "sr"


def geocode(base_url: str, query: str, country_codes: str, limit: int) -> str:
    """Key for a geocoder search (normalised query text)."""
    q = " ".join(query.lower().split())
    h = hashlib.sha256(f"{base_url}|{q}|{country_codes}|{limit}".encode()).hexdigest()[:16]
    return f"{_PREFIX}:geocode:{h}"


def route(base_url: str, profile: str, points: Sequence[Coordinate]) -> str:
    """Key for a routing request.

    Coordinates go in at full precision: the polyline starts at the requested
    start, so nearby starts must not share an entry.
    """
    coords = ";".join(f"{p.lng!r},{p.lat!r}" for p in points)
    h = hashlib.sha256(f"{base_url}|{profile}|{coords}".encode()).hexdigest()[:16]
    return f"{_PREFIX}:route:{profile}:{h}"
