from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from awc_api.schemas.common import RecordOut


class CommentStatusValue(str, Enum):
    approved = "approved"
    pending = "pending"
    rejected = "rejected"


COMMENT_STATUSES = tuple(s.value for s in CommentStatusValue)


class BlogCommentCreate(BaseModel):
    # presence and length are checked by the store so the error text matches the site's
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    content: Optional[str] = None


class BlogCommentStatusUpdate(BaseModel):
    status: Optional[str] = None


class BlogCommentOut(RecordOut):
    post_id: str
    author_name: str
    author_email: Optional[str] = None
    content: str
    status: str = CommentStatusValue.approved.value

    @field_validator("status", mode="before")
    @classmethod
    def _status_value(cls, v: Any) -> str:
        # ORM rows carry the SQLAlchemy enum member
        return getattr(v, "value", v)
