"""Per-client rate limit applied to every /api request."""
import logging
from datetime import timedelta

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from awc_api.services.rate_limit import SlidingWindowRateLimiter, client_identifier

logger = logging.getLogger("awc_api.rate_limit")


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, calls_per_minute: int = 120):
        super().__init__(app)
        self.limiter = SlidingWindowRateLimiter(calls_per_minute, timedelta(minutes=1))

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith("/api/") or request.method == "OPTIONS":
            return await call_next(request)
        identifier = client_identifier(request)
        if not self.limiter.allow(identifier):
            logger.warning(f"Rate limit exceeded for {identifier} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={"success": False, "error": "Too many requests, please try again later."},
                headers={"Retry-After": "60"},
            )
        return await call_next(request)
