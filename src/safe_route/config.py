"""Centralized settings for the safe-route backend."""
from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "SAFE_ROUTE_"}

    # Hazard / safe-zone tables: empty string means the built-in sample set
    hazard_file: str = ""

    # Provider names (see providers/factory.py)
    router: str = "osrm"
    geocoder: str = "nominatim"

    # OSRM public server only supports the driving profile
    osrm_url: str = "https://router.project-osrm.org/route/v1"
    osrm_profile: str = "driving"

    nominatim_url: str = "https://nominatim.openstreetmap.org"
    geocode_country_codes: str = "us"
    geocode_limit: int = 5
    # Seconds between Nominatim requests (public server policy: 1 per second)
    nominatim_min_interval_s: float = 1.0

    # HTTP
    user_agent: str = "safe-route/0.1 (hazard-aware routing)"
    http_timeout_s: int = 10
    http_tries: int = 3
    http_backoff_s: float = 0.5

    # Small-angle metres -> degrees constant used for avoidance offsets
    meters_per_degree: float = 111000.0

    # Redis: empty string means disabled (graceful fallback)
    redis_url: str = ""

    # TTL values in seconds for each cached data type
    ttl_geocode: int = 86400   # 24 h
    ttl_route: int = 3600      # 1 h

    log_level: str = "INFO"


settings = Settings()
