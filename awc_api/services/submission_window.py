"""Weekly testimonial submission window.

Testimonials may be submitted from Tuesday 12:00 through the end of Friday
(local time); they are reviewed for the Sunday service. Everything here is a pure
function of the ``now`` value passed in, which callers convert to the church's
time zone first (see ``awc_api.utils.datetime.to_local``).

The older server expressed the rule as ``(Tue <= day <= Fri) or (Tue and hour >= 12)
or (Fri and hour <= 23)``, which admits all of Tuesday morning. The documented
window (Tuesday noon onward) is the one enforced here, and ``next_open_time``
agrees with it.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta

OPEN_WEEKDAY = 1  # Tuesday (datetime.weekday(): Monday == 0)
OPEN_TIME = time(12, 0)
CLOSE_WEEKDAY = 4  # Friday, open until midnight

WINDOW_DESCRIPTION = "Tuesday 12:00 PM - Friday 11:59 PM"
CLOSED_MESSAGE = (
    "Testimonial submission is currently closed. "
    f"Submission window: {WINDOW_DESCRIPTION}"
)


def _window_start(now: datetime) -> datetime:
    """Tuesday 12:00 of the week (Monday-based) containing ``now``."""
    tuesday = now.date() + timedelta(days=OPEN_WEEKDAY - now.weekday())
    return datetime.combine(tuesday, OPEN_TIME, tzinfo=now.tzinfo)


def is_open(now: datetime) -> bool:
    day = now.weekday()
    if day == OPEN_WEEKDAY:
        return now.time() >= OPEN_TIME
    return OPEN_WEEKDAY < day <= CLOSE_WEEKDAY


def next_open_time(now: datetime) -> datetime:
    """Start of the first window that begins strictly after ``now``.

    Sunday, Monday and Tuesday morning map to this week's Tuesday noon (Sunday is
    treated as the start of the week, so Sunday looks two days ahead); any later
    moment, open or closed, maps to the following Tuesday noon.
    """
    if now.weekday() == 6:  # Sunday
        start = _window_start(now + timedelta(days=1))
    else:
        start = _window_start(now)
    if start <= now:
        start += timedelta(days=7)
    return start


def window_status(now: datetime) -> dict:
    open_now = is_open(now)
    return {
        "open": open_now,
        "next_open": next_open_time(now),
        "window": WINDOW_DESCRIPTION,
    }
