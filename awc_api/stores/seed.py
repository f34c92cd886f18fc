"""Demo content shown on a freshly started wall."""
from datetime import datetime, timedelta

from awc_api.stores.base import ANONYMOUS


def demo_prayers(now: datetime) -> list[dict]:
    return [
        {
            "name": "Sarah M.",
            "request": "Please pray for my father's healing journey.",
            "hearts": 23,
            "anonymous": False,
            "created_at": now,
        },
        {
            "name": ANONYMOUS,
            "request": "Pray for wisdom in a major career decision.",
            "hearts": 18,
            "anonymous": True,
            "created_at": now,
        },
    ]


def demo_testimonials(now: datetime) -> list[dict]:
    return [
        {
            "name": "Sarah M.",
            "testimony": (
                "God answered my prayer for my father's healing! After months of treatment, "
                "the doctors said his cancer is in complete remission. Truly a miracle!"
            ),
            "anonymous": False,
            "approved": True,
            "created_at": now,
            "approved_at": now,
        },
        {
            "name": ANONYMOUS,
            "testimony": (
                "I was struggling with addiction for years. Through prayer and this church family, "
                "God gave me strength to overcome. 6 months clean and grateful!"
            ),
            "anonymous": True,
            "approved": True,
            "created_at": now - timedelta(days=1),
            "approved_at": now - timedelta(hours=12),
        },
    ]


def seed_demo_data(stores, now: datetime) -> bool:
    """Load the demo prayers and testimonials into empty stores. Returns True if anything was added."""
    seeded = False
    if not stores.prayers.list():
        stores.prayers.load(demo_prayers(now))
        seeded = True
    if not stores.testimonials.list():
        stores.testimonials.load(demo_testimonials(now))
        seeded = True
    return seeded
