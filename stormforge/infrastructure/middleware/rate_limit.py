"""Fixed-window rate limiting keyed by client address."""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from stormforge.domain.errors import RateLimitError
from stormforge.infrastructure.telemetry.logging import get_logger
from stormforge.infrastructure.telemetry.metrics import record_rate_limited

logger = get_logger(__name__)

EVICTION_THRESHOLD = 1024


@dataclass
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float

    @property
    def reset_seconds(self) -> int:
        return max(1, math.ceil(self.reset_after))

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_seconds),
        }


class RateLimiter:
    """In-process fixed-window counter.

    Counters live in this process only; several workers each enforce
    their own budget.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # key -> (window start, hits)
        self._windows: dict[str, tuple[float, int]] = {}
        self._next_sweep = 0.0

    def hit(self, key: str) -> RateLimitDecision:
        """Count one request for key and decide whether it may proceed."""
        now = self._clock()
        start, count = self._windows.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0

        count += 1
        self._windows[key] = (start, count)
        self._evict_expired(now)

        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=self.window_seconds - (now - start),
        )

    def reset(self) -> None:
        self._windows.clear()
        self._next_sweep = 0.0

    def _evict_expired(self, now: float) -> None:
        # At most one scan per window, and only once the table grows
        if len(self._windows) < EVICTION_THRESHOLD or now < self._next_sweep:
            return
        self._next_sweep = now + self.window_seconds
        expired = [
            key
            for key, (start, _) in self._windows.items()
            if now - start >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects clients that exceed their request budget with 429."""

    def __init__(self, app, limiter: RateLimiter) -> None:
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next) -> Response:
        key = request.client.host if request.client else "anonymous"
        decision = self.limiter.hit(key)

        if not decision.allowed:
            error = RateLimitError(
                message=f"Rate limit exceeded, retry in {decision.reset_seconds} seconds",
                retry_after_seconds=decision.reset_seconds,
            )
            record_rate_limited()
            logger.warning(
                error.message,
                extra={"client": key, "path": request.url.path},
            )
            return JSONResponse(
                status_code=429,
                content={"error": error.code, "message": error.message},
                headers={
                    **decision.headers(),
                    "Retry-After": str(error.retry_after_seconds),
                },
            )

        response = await call_next(request)
        response.headers.update(decision.headers())
        return response
