from __future__ import annotations

from safe_route.providers.base import Geocoder, RoutingEngine
from safe_route.providers.http import HTTPClient


def _http(settings, min_interval_s: float = 0.0) -> HTTPClient:
    return HTTPClient(
        user_agent=settings.user_agent,
        timeout_s=settings.http_timeout_s,
        tries=settings.http_tries,
        backoff_s=settings.http_backoff_s,
        min_interval_s=min_interval_s,
    )


def build_router(name: str, settings) -> RoutingEngine:
    """
    Build a routing engine from a short name:
      "osrm" -> OSRMRouter against settings.osrm_url
      "mock" -> StraightLineRouter (offline)
    """
    token = (name or "osrm").strip().lower()

    # Local imports to avoid circular imports
    from safe_route.providers.mock import StraightLineRouter
    from safe_route.providers.osrm import OSRMRouter

    if token == "osrm":
        return OSRMRouter(
            base_url=settings.osrm_url,
            profile=settings.osrm_profile,
            http=_http(settings),
            ttl_s=settings.ttl_route,
        )
    if token == "mock":
        return StraightLineRouter()
    raise ValueError(f"Unknown router: '{name}' (supported: osrm, mock)")


def build_geocoder(name: str, settings) -> Geocoder:
    """
    Build a geocoder from a short name:
      "nominatim" -> NominatimGeocoder against settings.nominatim_url
      "mock"      -> StaticGeocoder (accepts "lat,lng" text only)
    """
    token = (name or "nominatim").strip().lower()

    from safe_route.providers.mock import StaticGeocoder
    from safe_route.providers.nominatim import NominatimGeocoder

    if token == "nominatim":
        return NominatimGeocoder(
            base_url=settings.nominatim_url,
            country_codes=settings.geocode_country_codes,
            limit=settings.geocode_limit,
            http=_http(settings, settings.nominatim_min_interval_s),
            ttl_s=settings.ttl_geocode,
        )
    if token == "mock":
        return StaticGeocoder()
    raise ValueError(f"Unknown geocoder: '{name}' (supported: nominatim, mock)")
