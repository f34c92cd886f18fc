"""FastAPI dependencies resolving per-process state from ``app.state``."""
from datetime import datetime
from typing import Callable

from fastapi import Request

from awc_api.core.settings import Settings, settings as _settings
from awc_api.services.rate_limit import SlidingWindowRateLimiter
from awc_api.stores import Stores


def get_settings() -> Settings:
    return _settings


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


def get_clock(request: Request) -> Callable[[], datetime]:
    return request.app.state.clock


def get_comment_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    return request.app.state.comment_rate_limiter


def get_public_dir(request: Request) -> str:
    return request.app.state.public_dir
