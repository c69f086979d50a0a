"""Shared ``requests`` session for the routing and geocoding services."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

log = logging.getLogger(__name__)

# Public OSRM / Nominatim answer these when overloaded or rate limiting
RETRY_STATUS = frozenset({429, 502, 503, 504})


@dataclass
class HTTPClient:
    user_agent: str
    timeout_s: int = 10
    tries: int = 3
    backoff_s: float = 0.5
    # Nominatim's usage policy allows one request per second
    min_interval_s: float = 0.0
    _last_request: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.s = requests.Session()
        self.s.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/json",
            }
        )

    def _throttle(self) -> None:
        if self.min_interval_s <= 0:
            return
        wait = self._last_request + self.min_interval_s - time.monotonic()
        if wait > 0:
            time.sleep(wait)
        self._last_request = time.monotonic()

    def _retry_delay(self, attempt: int, resp: Optional[requests.Response]) -> float:
        retry_after = resp.headers.get("Retry-After", "") if resp is not None else ""
        if retry_after.isdigit():
            return float(retry_after)
        return self.backoff_s * (2**attempt)

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout_s: Optional[int] = None,
    ) -> Any:
        """GET and decode JSON.

        Timeouts, dropped connections and RETRY_STATUS answers are retried with
        exponential backoff (or the server's ``Retry-After``). Other error
        statuses raise ``requests.HTTPError`` at once so callers can read the
        body, e.g. OSRM's ``NoRoute`` 400.
        """
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        last_err: Optional[requests.RequestException] = None
        for attempt in range(self.tries):
            self._throttle()
            resp = None
            try:
                resp = self.s.get(url, params=params, timeout=timeout)
            except (requests.Timeout, requests.ConnectionError) as e:
                last_err = e
            else:
                if resp.status_code not in RETRY_STATUS:
                    resp.raise_for_status()
                    return resp.json()
                last_err = requests.HTTPError(f"{resp.status_code} from {url}", response=resp)

            log.debug("GET %s failed (attempt %d/%d): %s", url, attempt + 1, self.tries, last_err)
            if attempt + 1 < self.tries:
                time.sleep(self._retry_delay(attempt, resp))
        if last_err is None:
            raise ValueError(f"HTTPClient.tries must be >= 1, got {self.tries}")
        raise last_err
