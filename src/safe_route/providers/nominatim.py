from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from safe_route.cache.store import GeocodeCache
from safe_route.contracts.route_contract import GeocodeResult
from safe_route.core.models import Coordinate
from safe_route.errors import GeocodingError
from safe_route.providers.base import Geocoder
from safe_route.providers.http import HTTPClient

log = logging.getLogger(__name__)


class NominatimGeocoder(Geocoder):
    """
    OpenStreetMap Nominatim search:

      GET {base_url}/search?q=...&format=json&limit=5&countrycodes=us

    Each hit carries string ``lat``/``lon`` and a ``display_name``.
    """

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        country_codes: str = "us",
        limit: int = 5,
        http: Optional[HTTPClient] = None,
        ttl_s: int = 86400,
    ):
        self.base_url = base_url.rstrip("/")
        self.country_codes = country_codes
        self.limit = limit
        self.http = http or HTTPClient(user_agent="safe-route/0.1", min_interval_s=1.0)
        self._cache = GeocodeCache(self.base_url, country_codes, limit, ttl_s)

    def _search(self, query: str) -> List[GeocodeResult]:
        params: Dict[str, Any] = {"q": query, "format": "json", "limit": self.limit}
        if self.country_codes:
            params["countrycodes"] = self.country_codes
        try:
            data = self.http.get_json(f"{self.base_url}/search", params=params)
        except requests.RequestException as e:
            raise GeocodingError(f"Nominatim lookup failed for {query!r}: {e}") from e
        hits: List[GeocodeResult] = []
        for row in data or []:
            try:
                location = Coordinate(lat=float(row["lat"]), lng=float(row["lon"]))
            except (KeyError, TypeError, ValueError):
                log.debug("Skipping malformed Nominatim row: %r", row)
                continue
            hits.append(GeocodeResult(location=location, label=str(row.get("display_name") or "")))
        return hits

    def geocode(self, query: str) -> List[GeocodeResult]:
        query = (query or "").strip()
        if not query:
            return []

        hits = self._cache.get(query)
        if hits is None:
            hits = self._search(query)
            self._cache.put(query, hits)

        log.info("Geocoded %r -> %d result(s)", query, len(hits))
        return list(hits)
