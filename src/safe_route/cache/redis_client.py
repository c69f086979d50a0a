"""Lazy connection to the optional Redis instance behind the response caches."""
from __future__ import annotations

import logging
from typing import Optional

import redis

log = logging.getLogger(__name__)

_client: Optional[redis.Redis] = None
_connected_url: Optional[str] = None


def get_redis(url: Optional[str] = None) -> Optional[redis.Redis]:
    """Return a client for *url* (default ``settings.redis_url``) or ``None``.

    Each URL is tried once per process. A failed ping leaves routing and
    geocoding results cached in-process only.
    """
    global _client, _connected_url
    if url is None:
        from safe_route.config import settings

        url = settings.redis_url
    if not url:
        return None
    if url == _connected_url:
        return _client

    _connected_url = url
    _client = None
    try:
        client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=3)
        client.ping()
    except (redis.RedisError, ValueError) as exc:
        log.warning("Redis at %s unavailable (%s); responses cached in-process only", url, exc)
        return None
    _client = client
    log.info("Redis connected: %s", url)
    return _client
