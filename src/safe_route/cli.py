from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Union

from rich.console import Console
from rich.table import Table

from safe_route.config import settings
from safe_route.core.hazards import HazardIndex, load_index
from safe_route.core.models import Coordinate, RouteAssessment
from safe_route.core.scoring import assess_route
from safe_route.errors import RouteFileError, SafeRouteError
from safe_route.planner import RoutePlanner
from safe_route.providers.factory import build_geocoder, build_router

LABEL_STYLE = {
    "safe": "green",
    "caution": "yellow",
    "unsafe": "red",
}


def _place(text: str) -> Union[Coordinate, str]:
    """``"lat,lng"`` becomes a Coordinate; anything else is geocoded later."""
    try:
        return Coordinate.parse(text)
    except ValueError:
        return text


def _read_polyline(path: Path) -> List[Coordinate]:
    """Points from ``[[lat, lng], ...]``, ``[{"lat", "lng"}, ...]`` or ``{"coordinates": [...]}``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("coordinates", [])
        out: List[Coordinate] = []
        for p in data:
            if isinstance(p, dict):
                out.append(Coordinate(**p))
            else:
                out.append(Coordinate(lat=float(p[0]), lng=float(p[1])))
    except OSError as e:
        raise RouteFileError(f"Cannot open {path}: {e}") from e
    except (ValueError, TypeError, IndexError) as e:
        # JSONDecodeError and pydantic's ValidationError are ValueErrors
        raise RouteFileError(f"Bad polyline in {path}: {e}") from e
    return out


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def _assessment_table(a: RouteAssessment, title: str) -> Table:
    style = LABEL_STYLE.get(a.label, "white")
    table = Table(title=title)
    table.add_column("Score")
    table.add_column("Label")
    table.add_column("Risk")
    table.add_column("Samples")
    table.add_column("Reasons")
    table.add_row(
        f"[{style}]{a.score}/100[/{style}]",
        f"[{style}]{a.label}[/{style}]",
        f"{a.total_risk:.2f}",
        str(a.samples),
        "; ".join(a.reasons),
    )
    return table


def main() -> None:
    ap = argparse.ArgumentParser(description="Hazard-aware route planning")
    ap.add_argument("--end", default="", help="Destination: 'lat,lng' or address text")
    ap.add_argument("--start", default="", help="Start: 'lat,lng' or address text")
    ap.add_argument("--router", default=settings.router, help="osrm | mock")
    ap.add_argument("--geocoder", default=settings.geocoder, help="nominatim | mock")
    ap.add_argument("--profile", default=settings.osrm_profile)
    ap.add_argument("--hazards", default=settings.hazard_file, help="Hazard JSON file (default: built-in sample)")
    ap.add_argument("--score", default="", help="Score a saved polyline JSON instead of planning")
    ap.add_argument("--out", default="runs", help="Directory for last_run.json")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [safe-route] %(levelname)s %(name)s: %(message)s",
    )

    console = Console()
    out_path = Path(args.out) / "last_run.json"

    try:
        index = HazardIndex.from_file(args.hazards) if args.hazards else load_index(settings)

        if args.score:
            coords = _read_polyline(Path(args.score))
            assessment = assess_route(coords, index.hazards, index.safe_zones)
            console.print(_assessment_table(assessment, f"Safety score: {args.score}"))
            _save_json(out_path, assessment.model_dump())
            console.print(f"Saved: {out_path.resolve()}")
            return

        planner = RoutePlanner(
            index,
            build_router(args.router, settings),
            build_geocoder(args.geocoder, settings),
            profile=args.profile,
            meters_per_degree=settings.meters_per_degree,
        )
        outcome = planner.plan(_place(args.end) if args.end else None, start=_place(args.start) if args.start else None)
    except SafeRouteError as e:
        console.print(f"[red]{e.user_message}[/red]")
        if args.debug:
            console.print(f"[dim]{e.detail}[/dim]")
        raise SystemExit(1)

    route = outcome.route

    wp_table = Table(title="Waypoints")
    wp_table.add_column("#")
    wp_table.add_column("Lat")
    wp_table.add_column("Lng")
    wp_table.add_column("Kind")
    wp_table.add_row("start", f"{route.start.lat:.5f}", f"{route.start.lng:.5f}", "")
    for i, wp in enumerate(route.waypoints, 1):
        kind = "safe zone" if wp.priority == 1 else "avoidance"
        wp_table.add_row(str(i), f"{wp.lat:.5f}", f"{wp.lng:.5f}", kind)
    wp_table.add_row("end", f"{route.end.lat:.5f}", f"{route.end.lng:.5f}", "")
    console.print(wp_table)

    summary = Table(title="Route")
    summary.add_column("Distance")
    summary.add_column("Duration")
    summary.add_column("Points")
    summary.add_row(f"{route.distance_km:.1f} km", f"{route.duration_min} min", str(len(route.coordinates)))
    console.print(summary)

    console.print(_assessment_table(route.assessment, "Safety"))
    console.print(outcome.message)

    _save_json(out_path, route.model_dump())
    console.print(f"Saved: {out_path.resolve()}")


if __name__ == "__main__":
    main()
