"""
Simple in-memory rate limiter for API endpoints.

Limiters are created per application (see ``build_rate_limiters``) and kept
on ``app.state``; there is no module-level store.
"""
import logging
import math
import threading
import time
from typing import Callable, Dict, List

from fastapi import Request

from resumatrix.core.config import Settings
from resumatrix.core.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Check for forwarded IP (from proxy/load balancer)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()

    # Fallback to direct client IP
    if request.client:
        return request.client.host

    return "unknown"


class RateLimiter:
    """Sliding-window limiter keyed by client IP."""

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # {ip: [timestamp, ...]}; keys without hits in the window are dropped
        self._hits: Dict[str, List[float]] = {}
        self._last_sweep = clock()

    def _sweep(self, now: float, cutoff: float) -> None:
        """Drop every key whose hits all fell out of the window. Caller holds the lock."""
        expired = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in expired:
            del self._hits[key]
        self._last_sweep = now
        if expired:
            logger.debug(f"Rate limit '{self.name}' dropped {len(expired)} idle clients")

    def check(self, key: str) -> None:
        """
        Record a request for ``key`` or reject it.

        Raises:
            RateLimitExceeded: 429 if the window is already full
        """
        now = self._clock()
        cutoff = now - self.window_seconds

        with self._lock:
            # At most one full sweep per window
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now, cutoff)

            # Clean old entries (older than window)
            hits = [ts for ts in self._hits.get(key, ()) if ts > cutoff]
            self._hits[key] = hits

            if len(hits) >= self.max_requests:
                retry_after = max(1, math.ceil(hits[0] + self.window_seconds - now))
                logger.warning(
                    f"Rate limit '{self.name}' exceeded for {key} "
                    f"({len(hits)} requests in {self.window_seconds}s)"
                )
                raise RateLimitExceeded(
                    f"Too many requests. Maximum {self.max_requests} requests per "
                    f"{self.window_seconds} seconds, please try again later.",
                    retry_after=retry_after,
                )

            hits.append(now)
            count = len(hits)

        logger.debug(f"Rate limit '{self.name}' passed for {key} ({count}/{self.max_requests})")

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def build_rate_limiters(settings: Settings) -> Dict[str, RateLimiter]:
    """Create the general, compile and optimize limiters from settings."""
    return {
        "general": RateLimiter(
            "general", settings.general_rate_limit, settings.general_rate_window_seconds
        ),
        "compile": RateLimiter(
            "compile", settings.compile_rate_limit, settings.compile_rate_window_seconds
        ),
        "optimize": RateLimiter(
            "optimize", settings.optimize_rate_limit, settings.optimize_rate_window_seconds
        ),
    }
