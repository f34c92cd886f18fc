"""Turn unhandled exceptions into the JSON error envelope inside the middleware stack.

Starlette sends responses for ``Exception`` handlers from its outermost
``ServerErrorMiddleware``, past CORS and correlation-id middleware. Catching
here, innermost, lets those 500 responses carry both headers.
"""
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from awc_api.core.settings import settings

logger = logging.getLogger("awc_api.errors")


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.error(
        f"[{correlation_id}] Unhandled exception on {request.url.path}: {str(exc)}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    content = {"success": False, "error": "Internal server error", "correlation_id": correlation_id}
    if settings.is_development:
        content["type"] = type(exc).__name__
    return JSONResponse(status_code=500, content=content)


class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return internal_error_response(request, exc)
