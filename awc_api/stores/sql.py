"""SQLAlchemy-backed record stores.

Each operation runs in its own session and transaction. Heart increments and
approvals are single conditional UPDATE statements so concurrent requests (or
processes sharing the database file) cannot lose an update or approve twice.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, sessionmaker

from awc_api.exceptions import AlreadyApprovedException, NotFoundException
from awc_api.models.blog_comment import BlogComment, CommentStatus
from awc_api.models.prayer import Prayer, PrayerComment
from awc_api.models.testimonial import Testimonial
from awc_api.schemas.blog_comment import BlogCommentOut
from awc_api.schemas.prayer import PrayerCommentOut, PrayerOut, PrayerStats
from awc_api.schemas.testimonial import TestimonialCounts, TestimonialOut
from awc_api.stores.base import BlogCommentStore, PrayerStore, TestimonialStore
from awc_api.utils.datetime import to_naive_utc

logger = logging.getLogger("awc_api.stores")


def _pk(value: str) -> Optional[int]:
    """Integer primary key for a path id, or None when it cannot name a row."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class _SqlStore:
    def __init__(self, session_factory: sessionmaker, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self):
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @staticmethod
    def _row_fields(fields: dict) -> dict:
        row = dict(fields)
        row.pop("id", None)
        for key in ("created_at", "approved_at"):
            if key in row:
                row[key] = to_naive_utc(row[key])
        return row


class SqlBlogCommentStore(_SqlStore, BlogCommentStore):
    def _insert(self, fields):
        row = self._row_fields(fields)
        row["status"] = CommentStatus(row["status"])
        with self._transaction() as db:
            comment = BlogComment(**row)
            db.add(comment)
            db.flush()
            return BlogCommentOut.model_validate(comment)

    def _update_status(self, comment_id, status):
        pk = _pk(comment_id)
        with self._transaction() as db:
            comment = db.get(BlogComment, pk) if pk is not None else None
            if comment is None:
                raise NotFoundException("Comment not found")
            comment.status = CommentStatus(status)
            db.flush()
            return BlogCommentOut.model_validate(comment)

    def list(self, post_id: Optional[str] = None, status: Optional[str] = None):
        with self._transaction() as db:
            q = db.query(BlogComment)
            if post_id is not None:
                q = q.filter(BlogComment.post_id == post_id)
            if status is not None:
                q = q.filter(BlogComment.status == CommentStatus(status))
            rows = q.order_by(BlogComment.created_at.desc(), BlogComment.id.desc()).all()
            return [BlogCommentOut.model_validate(r) for r in rows]

    def get(self, comment_id):
        pk = _pk(comment_id)
        with self._transaction() as db:
            comment = db.get(BlogComment, pk) if pk is not None else None
            if comment is None:
                raise NotFoundException("Comment not found")
            return BlogCommentOut.model_validate(comment)

    def delete(self, comment_id):
        pk = _pk(comment_id)
        with self._transaction() as db:
            deleted = 0
            if pk is not None:
                deleted = db.query(BlogComment).filter(BlogComment.id == pk).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundException("Comment not found")

    def count(self):
        with self._transaction() as db:
            return db.query(BlogComment).count()


class SqlPrayerStore(_SqlStore, PrayerStore):
    def _insert(self, fields):
        with self._transaction() as db:
            prayer = Prayer(**self._row_fields(fields))
            db.add(prayer)
            db.flush()
            return PrayerOut.model_validate(prayer)

    def _insert_comment(self, fields):
        row = self._row_fields(fields)
        row["prayer_id"] = _pk(row["prayer_id"])
        with self._transaction() as db:
            if row["prayer_id"] is None or db.get(Prayer, row["prayer_id"]) is None:
                raise NotFoundException("Prayer not found")
            comment = PrayerComment(**row)
            db.add(comment)
            db.flush()
            return PrayerCommentOut.model_validate(comment)

    def list(self):
        with self._transaction() as db:
            rows = db.query(Prayer).order_by(Prayer.created_at.desc(), Prayer.id.desc()).all()
            return [PrayerOut.model_validate(r) for r in rows]

    def get(self, prayer_id):
        pk = _pk(prayer_id)
        with self._transaction() as db:
            prayer = db.get(Prayer, pk) if pk is not None else None
            if prayer is None:
                raise NotFoundException("Prayer not found")
            return PrayerOut.model_validate(prayer)

    def increment_heart(self, prayer_id):
        pk = _pk(prayer_id)
        with self._transaction() as db:
            updated = 0
            if pk is not None:
                updated = (
                    db.query(Prayer)
                    .filter(Prayer.id == pk)
                    .update({Prayer.hearts: Prayer.hearts + 1}, synchronize_session=False)
                )
            if not updated:
                raise NotFoundException("Prayer not found")
            return PrayerOut.model_validate(db.get(Prayer, pk))

    def delete(self, prayer_id):
        pk = _pk(prayer_id)
        with self._transaction() as db:
            prayer = db.get(Prayer, pk) if pk is not None else None
            if prayer is None:
                raise NotFoundException("Prayer not found")
            removed = (
                db.query(PrayerComment)
                .filter(PrayerComment.prayer_id == pk)
                .delete(synchronize_session=False)
            )
            db.delete(prayer)
        logger.debug(f"Deleted prayer {pk} with {removed} comments")

    def list_comments(self, prayer_id: Optional[str] = None):
        with self._transaction() as db:
            q = db.query(PrayerComment)
            if prayer_id is not None:
                pk = _pk(prayer_id)
                if pk is None:
                    return []
                q = q.filter(PrayerComment.prayer_id == pk)
            rows = q.order_by(PrayerComment.created_at.desc(), PrayerComment.id.desc()).all()
            return [PrayerCommentOut.model_validate(r) for r in rows]

    def delete_comment(self, comment_id):
        pk = _pk(comment_id)
        with self._transaction() as db:
            comment = db.get(PrayerComment, pk) if pk is not None else None
            if comment is None:
                raise NotFoundException("Comment not found")
            out = PrayerCommentOut.model_validate(comment)
            db.delete(comment)
        return out

    def stats(self):
        with self._transaction() as db:
            return PrayerStats(
                totalPrayers=db.query(Prayer).count(),
                totalHearts=db.query(func.coalesce(func.sum(Prayer.hearts), 0)).scalar(),
                totalComments=db.query(PrayerComment).count(),
            )


class SqlTestimonialStore(_SqlStore, TestimonialStore):
    def _insert(self, fields):
        with self._transaction() as db:
            testimonial = Testimonial(**self._row_fields(fields))
            db.add(testimonial)
            db.flush()
            return TestimonialOut.model_validate(testimonial)

    def list(self, approved: Optional[bool] = None):
        with self._transaction() as db:
            q = db.query(Testimonial)
            if approved is not None:
                q = q.filter(Testimonial.approved == approved)
            rows = q.order_by(Testimonial.created_at.desc(), Testimonial.id.desc()).all()
            return [TestimonialOut.model_validate(r) for r in rows]

    def get(self, testimonial_id):
        pk = _pk(testimonial_id)
        with self._transaction() as db:
            testimonial = db.get(Testimonial, pk) if pk is not None else None
            if testimonial is None:
                raise NotFoundException("Testimonial not found")
            return TestimonialOut.model_validate(testimonial)

    def approve(self, testimonial_id):
        pk = _pk(testimonial_id)
        if pk is None:
            raise NotFoundException("Testimonial not found")
        with self._transaction() as db:
            updated = (
                db.query(Testimonial)
                .filter(Testimonial.id == pk, Testimonial.approved.is_(False))
                .update(
                    {Testimonial.approved: True, Testimonial.approved_at: to_naive_utc(self._clock())},
                    synchronize_session=False,
                )
            )
            if not updated:
                if db.get(Testimonial, pk) is None:
                    raise NotFoundException("Testimonial not found")
                raise AlreadyApprovedException("Testimonial already approved")
            return TestimonialOut.model_validate(db.get(Testimonial, pk))

    def delete(self, testimonial_id):
        pk = _pk(testimonial_id)
        with self._transaction() as db:
            deleted = 0
            if pk is not None:
                deleted = db.query(Testimonial).filter(Testimonial.id == pk).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundException("Testimonial not found")

    def counts(self):
        with self._transaction() as db:
            total = db.query(Testimonial).count()
            approved = db.query(Testimonial).filter(Testimonial.approved.is_(True)).count()
        return TestimonialCounts(pending=total - approved, approved=approved, total=total)
