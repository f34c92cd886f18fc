"""Testimonial submission (weekly window) and pastoral approval."""
import logging
from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends

from awc_api.core.settings import Settings
from awc_api.deps import get_clock, get_settings, get_stores
from awc_api.exceptions import WindowClosedException
from awc_api.schemas.testimonial import TestimonialCreate
from awc_api.services import submission_window
from awc_api.stores import Stores
from awc_api.utils.datetime import isoformat_z, to_local

logger = logging.getLogger("awc_api.testimonials")
router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])


def _local_now(clock: Callable[[], datetime], settings: Settings) -> datetime:
    return to_local(clock(), settings.submission_timezone)


@router.get("")
def list_testimonials(
    stores: Stores = Depends(get_stores),
    clock: Callable[[], datetime] = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    """All testimonials; the site shows only approved ones to the public."""
    testimonials = stores.testimonials.list()
    return {
        "success": True,
        "testimonials": testimonials,
        "total": len(testimonials),
        "submissionWindowOpen": submission_window.is_open(_local_now(clock, settings)),
    }


@router.get("/status")
def submission_status(
    clock: Callable[[], datetime] = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    status = submission_window.window_status(to_local(now, settings.submission_timezone))
    logger.debug(f"Submission window {'OPEN' if status['open'] else 'CLOSED'}")
    return {
        "success": True,
        "submissionOpen": status["open"],
        "nextSubmissionWindow": isoformat_z(status["next_open"]),
        "currentTime": isoformat_z(now),
        "submissionWindow": status["window"],
        "timezone": settings.submission_timezone,
    }


@router.post("", status_code=201)
def create_testimonial(
    payload: TestimonialCreate,
    stores: Stores = Depends(get_stores),
    clock: Callable[[], datetime] = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    if not submission_window.is_open(_local_now(clock, settings)):
        raise WindowClosedException(submission_window.CLOSED_MESSAGE)

    testimonial = stores.testimonials.create(
        name=payload.name,
        testimony=payload.testimony,
        anonymous=payload.anonymous,
    )
    logger.info(f"Testimonial {testimonial.id} submitted by {testimonial.name} for review")
    return {
        "success": True,
        "testimonial": testimonial,
        "message": "Testimony submitted for pastoral review",
    }


@router.post("/{testimonial_id}/approve")
def approve_testimonial(testimonial_id: str, stores: Stores = Depends(get_stores)):
    testimonial = stores.testimonials.approve(testimonial_id)
    logger.info(f"Testimonial {testimonial_id} approved for Sunday service")
    return {
        "success": True,
        "testimonial": testimonial,
        "message": "Testimonial approved for Sunday service",
    }


@router.delete("/{testimonial_id}")
def delete_testimonial(testimonial_id: str, stores: Stores = Depends(get_stores)):
    stores.testimonials.delete(testimonial_id)
    logger.info(f"Testimonial {testimonial_id} deleted")
    return {"success": True, "message": "Testimonial deleted successfully"}
