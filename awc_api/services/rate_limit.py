"""Sliding-window rate limiting kept in process memory.

Counts reset when the server restarts; a multi-process deployment would need a
shared store such as Redis.
"""
import threading
from datetime import datetime, timedelta
from typing import Callable

from awc_api.utils.datetime import utc_now


class SlidingWindowRateLimiter:
    def __init__(self, max_requests: int, window: timedelta, clock: Callable[[], datetime] = utc_now):
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._hits: dict[str, list[datetime]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def allow(self, identifier: str) -> bool:
        """Record a hit for ``identifier``; False when the limit is already reached."""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)
            # Clean old entries
            hits = [ts for ts in self._hits.get(identifier, []) if now - ts < self.window]
            if len(hits) >= self.max_requests:
                self._hits[identifier] = hits
                return False
            hits.append(now)
            self._hits[identifier] = hits
            return True

    def _sweep(self, now: datetime) -> None:
        # forget clients whose newest hit has left the window
        stale = [key for key, hits in self._hits.items() if not hits or now - hits[-1] >= self.window]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def client_identifier(request) -> str:
    """Peer address of the request.

    Behind a reverse proxy, run uvicorn with ``--proxy-headers`` and
    ``--forwarded-allow-ips`` so the trusted proxy's X-Forwarded-For becomes the
    peer address; the raw header is never read here because any client can set it.
    """
    return request.client.host if request.client else "unknown"
