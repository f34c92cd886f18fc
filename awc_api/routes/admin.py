"""Moderation endpoints. Unauthenticated: the admin pages are not linked publicly."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from awc_api.deps import get_stores
from awc_api.exceptions import InvalidStatusException
from awc_api.schemas.blog_comment import COMMENT_STATUSES, BlogCommentStatusUpdate
from awc_api.stores import Stores

logger = logging.getLogger("awc_api.admin")
router = APIRouter(tags=["Admin"])


@router.delete("/api/comments/{comment_id}")
def delete_prayer_comment(comment_id: str, stores: Stores = Depends(get_stores)):
    comment = stores.prayers.delete_comment(comment_id)
    logger.info(f"Comment {comment_id} deleted from prayer {comment.prayer_id}")
    return {"success": True, "message": "Comment deleted successfully"}


@router.get("/api/admin/comments")
def list_all_prayer_comments(stores: Stores = Depends(get_stores)):
    comments = stores.prayers.list_comments()
    logger.info(f"Admin: sent {len(comments)} prayer comments")
    return {"success": True, "comments": comments, "total": len(comments)}


@router.get("/api/admin/blog-comments")
def list_blog_comments(
    status: Optional[str] = None,
    post_id: Optional[str] = None,
    stores: Stores = Depends(get_stores),
):
    if status is not None and status not in COMMENT_STATUSES:
        raise InvalidStatusException(
            f"Invalid status. Must be one of: {', '.join(COMMENT_STATUSES)}"
        )
    comments = stores.blog_comments.list(post_id=post_id, status=status)
    return {"success": True, "comments": comments, "total": len(comments)}


@router.put("/api/admin/blog-comments/{comment_id}/status")
def set_blog_comment_status(
    comment_id: str,
    payload: BlogCommentStatusUpdate,
    stores: Stores = Depends(get_stores),
):
    comment = stores.blog_comments.set_status(comment_id, payload.status)
    logger.info(f"Blog comment {comment_id} marked {comment.status}")
    return {"success": True, "comment": comment}


@router.delete("/api/admin/blog-comments/{comment_id}")
def delete_blog_comment(comment_id: str, stores: Stores = Depends(get_stores)):
    stores.blog_comments.delete(comment_id)
    logger.info(f"Blog comment {comment_id} deleted")
    return {"success": True, "message": "Comment deleted successfully"}


@router.get("/api/admin/testimonials/pending")
def testimonial_counts(stores: Stores = Depends(get_stores)):
    counts = stores.testimonials.counts()
    return {"success": True, **counts.model_dump()}


@router.get("/api/stats")
def prayer_wall_stats(stores: Stores = Depends(get_stores)):
    stats = stores.prayers.stats()
    logger.info(
        f"Stats: {stats.totalPrayers} prayers, {stats.totalHearts} hearts, {stats.totalComments} comments"
    )
    return {"success": True, "stats": stats}
