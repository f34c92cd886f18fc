from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, Index
import enum
from datetime import datetime, UTC

from awc_api.db import Base


class CommentStatus(enum.Enum):
    approved = "approved"
    pending = "pending"
    rejected = "rejected"


class BlogComment(Base):
    __tablename__ = "blog_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String(200), nullable=False, index=True)
    author_name = Column(String(100), nullable=False)
    author_email = Column(String(254), nullable=True)
    content = Column(Text, nullable=False)
    status = Column(Enum(CommentStatus), nullable=False, default=CommentStatus.approved)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(UTC))

    __table_args__ = (
        Index("ix_blog_comments_post_created", "post_id", "created_at"),
    )
