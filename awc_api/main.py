from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Callable, Optional
import logging
import os
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from awc_api.core.logging_config import setup_logging
from awc_api.core.settings import settings
from awc_api.middleware.cors import DomainAllowListCORSMiddleware
from awc_api.middleware.errors import ErrorEnvelopeMiddleware, internal_error_response
from awc_api.middleware.logging import LoggingMiddleware
from awc_api.middleware.rate_limit import RateLimitMiddleware
from awc_api.middleware.timeout import TimeoutMiddleware
from awc_api.routes import admin, blog_comments, health, pages, prayers, testimonials
from awc_api.services.rate_limit import SlidingWindowRateLimiter
from awc_api.stores import Stores, build_stores
from awc_api.utils.datetime import utc_now
from awc_api.exceptions import (
    ForbiddenException, NotFoundException,
    RateLimitedException, ValidationException,
)

# Set up logging first
logger = setup_logging()

_templates_dir = os.path.join(os.path.dirname(__file__), "templates")
jinja_templates = Jinja2Templates(directory=_templates_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 50)
    logger.info("🚀 AWC Church API starting up")
    logger.info(f"📁 Environment: {settings.environment}")
    logger.info(f"🗄️ Storage backend: {settings.storage_backend}")
    logger.info(f"🌐 CORS domains: {', '.join(settings.cors_allowed_domains)}")
    logger.info(f"⚡ Rate limiting: {'enabled' if settings.rate_limit_enabled else 'disabled'}")
    logger.info(f"🙌 Testimonial window time zone: {settings.submission_timezone}")
    logger.info("=" * 50)

    if getattr(app.state, "stores", None) is None:
        app.state.stores = build_stores(settings, app.state.clock)

    yield
    logger.info("🛑 AWC Church API shutting down")
    engine = getattr(app.state.stores, "engine", None)
    if engine is not None:
        engine.dispose()


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "correlation_id": correlation_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationException)
    async def validation_exception_handler(request: Request, exc: ValidationException):
        logger.warning(f"Validation error on {request.url.path}: {exc.detail}")
        return _error_response(request, exc.status_code, exc.detail)

    @app.exception_handler(NotFoundException)
    async def not_found_exception_handler(request: Request, exc: NotFoundException):
        logger.warning(f"Not found on {request.url.path}: {exc.detail}")
        return _error_response(request, 404, exc.detail)

    @app.exception_handler(ForbiddenException)
    async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
        logger.warning(f"Forbidden on {request.url.path}: {exc.detail}")
        return _error_response(request, 403, exc.detail)

    @app.exception_handler(RateLimitedException)
    async def rate_limited_exception_handler(request: Request, exc: RateLimitedException):
        response = _error_response(request, 429, exc.detail)
        response.headers["Retry-After"] = str(settings.comment_rate_window_seconds)
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"Invalid request: {field} {first.get('msg', '')}".strip() if field else "Invalid request body"
        logger.warning(f"Request validation failed on {request.url.path}: {errors}")
        return _error_response(request, 400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and not request.url.path.startswith("/api"):
            return jinja_templates.TemplateResponse(
                request, "404.html", {"path": request.url.path}, status_code=404
            )
        response = _error_response(request, exc.status_code, str(exc.detail))
        for key, value in (exc.headers or {}).items():
            response.headers[key] = value
        return response

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        # only reached for errors raised outside ErrorEnvelopeMiddleware
        return internal_error_response(request, exc)


def create_app(
    stores: Optional[Stores] = None,
    clock: Callable = utc_now,
    public_dir: Optional[str] = None,
) -> FastAPI:
    app = FastAPI(
        title="AWC Church API",
        description="Blog comments, prayer wall and testimonials for the church website",
        version="1.0.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.clock = clock
    app.state.public_dir = os.path.abspath(public_dir or settings.public_dir)
    app.state.stores = stores
    app.state.comment_rate_limiter = SlidingWindowRateLimiter(
        settings.comment_rate_limit,
        timedelta(seconds=settings.comment_rate_window_seconds),
        clock,
    )

    # Add middleware in correct order (last added = first executed)
    app.add_middleware(ErrorEnvelopeMiddleware)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    if settings.rate_limit_enabled:
        app.add_middleware(RateLimitMiddleware, calls_per_minute=settings.rate_limit_per_minute)
    app.add_middleware(DomainAllowListCORSMiddleware, allowed_domains=settings.cors_allowed_domains)
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(blog_comments.router)
    app.include_router(prayers.router)
    app.include_router(testimonials.router)
    app.include_router(admin.router)
    app.include_router(pages.router)

    # Static site last so API routes and page aliases take precedence
    public_dir = app.state.public_dir
    if os.path.isdir(public_dir):
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
        logger.info(f"🎨 Static site mounted at / from {public_dir}")
    else:
        logger.warning(f"Public directory not found at {public_dir}; static pages disabled")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level="info" if settings.is_development else "warning"
    )
