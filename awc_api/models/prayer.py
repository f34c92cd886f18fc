from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from awc_api.db import Base


class Prayer(Base):
    __tablename__ = "prayers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    request = Column(Text, nullable=False)
    hearts = Column(Integer, nullable=False, default=0)
    anonymous = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(UTC))

    comments = relationship(
        "PrayerComment",
        back_populates="prayer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class PrayerComment(Base):
    __tablename__ = "prayer_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    prayer_id = Column(Integer, ForeignKey("prayers.id", ondelete="CASCADE"), nullable=False, index=True)
    author_name = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    anonymous = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(UTC))

    prayer = relationship("Prayer", back_populates="comments")
