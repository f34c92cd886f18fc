import os

# settings are read at import time, so configure the environment first
os.environ["ENV"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SUBMISSION_TIMEZONE"] = "UTC"

from datetime import datetime, timedelta, UTC

import pytest
from fastapi.testclient import TestClient

from awc_api.db import make_engine
from awc_api.deps import get_clock, get_comment_rate_limiter, get_stores
from awc_api.main import app
from awc_api.services.rate_limit import SlidingWindowRateLimiter
from awc_api.stores import memory_stores, sql_stores

# Fixed reference week (October 2026): Sunday the 11th .. Saturday the 17th
SUNDAY = datetime(2026, 10, 11, 10, 0, tzinfo=UTC)
MONDAY = datetime(2026, 10, 12, 10, 0, tzinfo=UTC)
TUESDAY_MORNING = datetime(2026, 10, 13, 9, 30, tzinfo=UTC)
TUESDAY_NOON = datetime(2026, 10, 13, 12, 0, tzinfo=UTC)
WEDNESDAY = datetime(2026, 10, 14, 15, 0, tzinfo=UTC)
FRIDAY_NIGHT = datetime(2026, 10, 16, 23, 30, tzinfo=UTC)
SATURDAY = datetime(2026, 10, 17, 8, 0, tzinfo=UTC)
NEXT_TUESDAY_NOON = datetime(2026, 10, 20, 12, 0, tzinfo=UTC)


class FrozenClock:
    """Callable clock that only moves when a test moves it."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    # inside the testimonial window unless a test moves it
    return FrozenClock(WEDNESDAY)


@pytest.fixture(params=["memory", "database"])
def stores(request, clock):
    """Fresh, empty stores for each test, run once per storage backend."""
    if request.param == "memory":
        yield memory_stores(clock)
        return
    # In-memory SQLite behind a StaticPool so every session shares one database
    engine = make_engine("sqlite+pysqlite:///:memory:")
    try:
        yield sql_stores(engine, clock)
    finally:
        engine.dispose()


@pytest.fixture
def comment_limiter(clock):
    return SlidingWindowRateLimiter(5, timedelta(minutes=15), clock)


@pytest.fixture(autouse=True)
def app_overrides(request):
    """Point the app at this test's stores and clock when the test uses them."""
    if "stores" in request.fixturenames:
        stores = request.getfixturevalue("stores")
        clock = request.getfixturevalue("clock")
        limiter = request.getfixturevalue("comment_limiter")
        app.dependency_overrides[get_stores] = lambda: stores
        app.dependency_overrides[get_clock] = lambda: clock
        app.dependency_overrides[get_comment_rate_limiter] = lambda: limiter
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(stores):
    return TestClient(app)
