from __future__ import annotations

from math import floor
from typing import Dict, List, Sequence

from safe_route.core.geo import distance_km
from safe_route.core.models import Coordinate, HazardZone, RouteAssessment, SafeZone

# Roughly how many polyline points get scored, whatever the route length
TARGET_SAMPLES = 50
# Accumulated risk that maps to a score of 0
MAX_EXPECTED_RISK = 50.0
# Flat risk reduction per sample inside a safe zone
SAFE_ZONE_BONUS = 0.5


def _round_half_up(x: float) -> int:
    return int(floor(x + 0.5))


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, float(x)))


def safety_label(score: int) -> str:
    if score >= 80:
        return "safe"
    if score >= 60:
        return "caution"
    return "unsafe"


def sample_stride(n_points: int) -> int:
    return max(1, n_points // TARGET_SAMPLES)


def assess_route(
    coordinates: Sequence[Coordinate],
    hazards: Sequence[HazardZone],
    safe_zones: Sequence[SafeZone],
) -> RouteAssessment:
    """
    Score a computed polyline for hazard exposure.

    Every ``stride``-th point is checked against each zone. Inside a hazard,
    risk decays linearly from ``severity`` at the centre to 0 at the edge;
    inside a safe zone a flat bonus is subtracted. The total is normalised
    against ``MAX_EXPECTED_RISK`` into a 0..100 score (higher = safer).
    """
    total_risk = 0.0
    samples = 0
    hazard_hits: Dict[int, HazardZone] = {}
    zone_hits: Dict[int, SafeZone] = {}

    stride = sample_stride(len(coordinates))
    for i in range(0, len(coordinates), stride):
        point = coordinates[i]
        samples += 1

        for idx, hazard in enumerate(hazards):
            d_m = distance_km(point, hazard.location) * 1000.0
            if d_m < hazard.radius:
                total_risk += (1.0 - d_m / hazard.radius) * hazard.severity
                hazard_hits.setdefault(idx, hazard)

        for idx, zone in enumerate(safe_zones):
            d_m = distance_km(point, zone.location) * 1000.0
            if d_m < zone.radius:
                total_risk -= SAFE_ZONE_BONUS
                zone_hits.setdefault(idx, zone)

    raw = 100.0 - (total_risk / MAX_EXPECTED_RISK) * 100.0
    score = _round_half_up(_clamp(raw, 0.0, 100.0))

    reasons: List[str] = []
    for h in hazard_hits.values():
        reasons.append(f"{h.description or h.type} (risk {h.severity}/5)")
    for z in zone_hits.values():
        reasons.append(f"Passes {z.description or z.type}")

    return RouteAssessment(
        score=score,
        label=safety_label(score),
        total_risk=float(round(total_risk, 3)),
        samples=samples,
        reasons=reasons,
    )


def score_route(
    coordinates: Sequence[Coordinate],
    hazards: Sequence[HazardZone],
    safe_zones: Sequence[SafeZone],
) -> int:
    """0..100 safety score for a route; an empty route scores 100."""
    return assess_route(coordinates, hazards, safe_zones).score
