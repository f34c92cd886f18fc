"""Prayer wall endpoints."""
import logging

from fastapi import APIRouter, Depends

from awc_api.deps import get_stores
from awc_api.schemas.prayer import PrayerCommentCreate, PrayerCreate
from awc_api.stores import Stores

logger = logging.getLogger("awc_api.prayers")
router = APIRouter(prefix="/api/prayers", tags=["Prayer Wall"])


@router.get("")
def list_prayers(stores: Stores = Depends(get_stores)):
    prayers = stores.prayers.list()
    logger.info(f"Sent {len(prayers)} prayers")
    return {"success": True, "prayers": prayers, "total": len(prayers)}


@router.post("", status_code=201)
def create_prayer(payload: PrayerCreate, stores: Stores = Depends(get_stores)):
    prayer = stores.prayers.create(
        name=payload.name,
        request=payload.request,
        anonymous=payload.anonymous,
    )
    logger.info(f"Prayer {prayer.id} added by {prayer.name}")
    return {"success": True, "prayer": prayer}


@router.post("/{prayer_id}/heart")
def heart_prayer(prayer_id: str, stores: Stores = Depends(get_stores)):
    prayer = stores.prayers.increment_heart(prayer_id)
    logger.info(f"Prayer {prayer_id} hearted, new count {prayer.hearts}")
    return {"success": True, "prayer": prayer}


@router.get("/{prayer_id}/comments")
def list_prayer_comments(prayer_id: str, stores: Stores = Depends(get_stores)):
    comments = stores.prayers.list_comments(prayer_id)
    return {"success": True, "comments": comments, "total": len(comments)}


@router.post("/{prayer_id}/comments", status_code=201)
def create_prayer_comment(
    prayer_id: str,
    payload: PrayerCommentCreate,
    stores: Stores = Depends(get_stores),
):
    comment = stores.prayers.create_comment(
        prayer_id=prayer_id,
        author_name=payload.author_name,
        content=payload.content,
        anonymous=payload.anonymous,
    )
    logger.info(f"Comment {comment.id} added by {comment.author_name} to prayer {prayer_id}")
    return {"success": True, "comment": comment}


@router.delete("/{prayer_id}")
def delete_prayer(prayer_id: str, stores: Stores = Depends(get_stores)):
    """Admin: remove a prayer together with all of its comments."""
    stores.prayers.delete(prayer_id)
    logger.info(f"Prayer {prayer_id} and its comments deleted")
    return {"success": True, "message": "Prayer deleted successfully"}
