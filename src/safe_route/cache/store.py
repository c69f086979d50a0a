"""Response caches owned by the OSRM and Nominatim providers.

Lookups hit an in-process dict first, then Redis when ``redis_url`` is set.
A Redis error or an unreadable entry counts as a miss, so a lookup never
fails a plan.
"""
from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional, Sequence

import redis

from safe_route.cache import keys, redis_client
from safe_route.contracts.route_contract import GeocodeResult, RoutingResult
from safe_route.core.models import Coordinate

log = logging.getLogger(__name__)


def _remote_get(key: str) -> Optional[str]:
    r = redis_client.get_redis()
    if r is None:
        return None
    try:
        return r.get(key)
    except (redis.RedisError, OSError) as exc:
        log.debug("cache get %s failed: %s", key, exc)
        return None


def _remote_set(key: str, raw: str, ttl_s: int) -> None:
    r = redis_client.get_redis()
    if r is None:
        return
    try:
        r.set(key, raw, ex=ttl_s)
    except (redis.RedisError, OSError) as exc:
        log.debug("cache set %s failed: %s", key, exc)


class RouteCache:
    """OSRM responses keyed by server, profile and the exact point list."""

    def __init__(self, base_url: str, ttl_s: int = 3600):
        self.base_url = base_url
        self.ttl_s = ttl_s
        self._local: Dict[str, RoutingResult] = {}

    def get(self, points: Sequence[Coordinate], profile: str) -> Optional[RoutingResult]:
        key = keys.route(self.base_url, profile, points)
        if key in self._local:
            return self._local[key]
        raw = _remote_get(key)
        if raw is None:
            return None
        try:
            result = RoutingResult.from_payload(json.loads(raw))
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Ignoring unreadable cached route %s: %s", key, exc)
            return None
        log.debug("Route served from Redis: %s", key)
        self._local[key] = result
        return result

    def put(self, points: Sequence[Coordinate], profile: str, result: RoutingResult) -> None:
        key = keys.route(self.base_url, profile, points)
        self._local[key] = result
        _remote_set(key, json.dumps(result.to_payload()), self.ttl_s)


class GeocodeCache:
    """Nominatim hit lists keyed by the normalised query. Empty lists are cached too."""

    def __init__(self, base_url: str, country_codes: str, limit: int, ttl_s: int = 86400):
        self.base_url = base_url
        self.country_codes = country_codes
        self.limit = limit
        self.ttl_s = ttl_s
        self._local: Dict[str, List[GeocodeResult]] = {}

    def _key(self, query: str) -> str:
        return keys.geocode(self.base_url, query, self.country_codes, self.limit)

    def get(self, query: str) -> Optional[List[GeocodeResult]]:
        key = self._key(query)
        if key in self._local:
            return self._local[key]
        raw = _remote_get(key)
        if raw is None:
            return None
        try:
            hits = [GeocodeResult.from_payload(row) for row in json.loads(raw)]
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Ignoring unreadable cached geocode %s: %s", key, exc)
            return None
        log.debug("Geocode served from Redis: %s", key)
        self._local[key] = hits
        return hits

    def put(self, query: str, hits: List[GeocodeResult]) -> None:
        key = self._key(query)
        self._local[key] = hits
        _remote_set(key, json.dumps([h.to_payload() for h in hits]), self.ttl_s)
