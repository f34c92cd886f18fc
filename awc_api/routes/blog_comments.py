import logging

from fastapi import APIRouter, Depends, Request

from awc_api.deps import get_comment_rate_limiter, get_stores
from awc_api.exceptions import RateLimitedException
from awc_api.schemas.blog_comment import BlogCommentCreate, BlogCommentOut
from awc_api.services.rate_limit import SlidingWindowRateLimiter, client_identifier
from awc_api.stores import Stores

logger = logging.getLogger("awc_api.blog_comments")
router = APIRouter(prefix="/api/comments", tags=["Blog Comments"])


@router.get("/{post_id}", response_model=list[BlogCommentOut])
def list_post_comments(post_id: str, stores: Stores = Depends(get_stores)):
    """Approved comments for a blog post, newest first."""
    return stores.blog_comments.list(post_id=post_id, status="approved")


@router.post("/{post_id}", response_model=BlogCommentOut, status_code=201)
def create_post_comment(
    post_id: str,
    payload: BlogCommentCreate,
    request: Request,
    stores: Stores = Depends(get_stores),
    limiter: SlidingWindowRateLimiter = Depends(get_comment_rate_limiter),
):
    identifier = client_identifier(request)
    if not limiter.allow(identifier):
        logger.warning(f"Comment rate limit hit by {identifier} on post {post_id}")
        raise RateLimitedException("Too many comments. Please try again later.")

    comment = stores.blog_comments.create(
        post_id=post_id,
        author_name=payload.author_name,
        content=payload.content,
        author_email=payload.author_email,
    )
    logger.info(f"Comment {comment.id} added to post {post_id} by {comment.author_name}")
    return comment
