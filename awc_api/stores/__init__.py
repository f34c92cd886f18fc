"""Record stores and the factory that picks a backend from settings."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from awc_api.stores.base import (
    ANONYMOUS,
    BlogCommentStore,
    Clock,
    PrayerStore,
    TestimonialStore,
)
from awc_api.utils.datetime import utc_now

logger = logging.getLogger("awc_api.stores")

__all__ = [
    "ANONYMOUS",
    "BlogCommentStore",
    "PrayerStore",
    "TestimonialStore",
    "Stores",
    "memory_stores",
    "sql_stores",
    "build_stores",
]


@dataclass
class Stores:
    blog_comments: BlogCommentStore
    prayers: PrayerStore
    testimonials: TestimonialStore
    backend: str = "memory"
    engine: Optional[Engine] = None


def memory_stores(clock: Clock = utc_now, comment_max_length: int = 1000, testimony_max_length: int = 2000) -> Stores:
    from awc_api.stores.memory import (
        MemoryBlogCommentStore,
        MemoryPrayerStore,
        MemoryTestimonialStore,
    )
    return Stores(
        blog_comments=MemoryBlogCommentStore(clock, comment_max_length),
        prayers=MemoryPrayerStore(clock, comment_max_length),
        testimonials=MemoryTestimonialStore(clock, testimony_max_length),
        backend="memory",
    )


def sql_stores(engine: Engine, clock: Clock = utc_now, comment_max_length: int = 1000, testimony_max_length: int = 2000) -> Stores:
    from awc_api.db import init_db, make_session_factory
    from awc_api.stores.sql import (
        SqlBlogCommentStore,
        SqlPrayerStore,
        SqlTestimonialStore,
    )
    init_db(engine)
    session_factory = make_session_factory(engine)
    return Stores(
        blog_comments=SqlBlogCommentStore(session_factory, clock, comment_max_length),
        prayers=SqlPrayerStore(session_factory, clock, comment_max_length),
        testimonials=SqlTestimonialStore(session_factory, clock, testimony_max_length),
        backend="database",
        engine=engine,
    )


def build_stores(settings, clock: Clock = utc_now) -> Stores:
    """Stores for the configured STORAGE_BACKEND, seeded with demo content when enabled."""
    limits = {
        "comment_max_length": settings.comment_max_length,
        "testimony_max_length": settings.testimony_max_length,
    }
    if settings.storage_backend == "database":
        from awc_api.db import get_engine
        stores = sql_stores(get_engine(), clock, **limits)
    else:
        stores = memory_stores(clock, **limits)
        logger.warning("Using in-memory storage; all data is lost when the process restarts")

    if settings.seed_demo_data:
        from awc_api.stores.seed import seed_demo_data
        if seed_demo_data(stores, clock()):
            logger.info("Seeded demo prayers and testimonials")
    return stores
