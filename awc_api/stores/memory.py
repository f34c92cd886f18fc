"""In-process record stores.

State lives in plain dicts guarded by a lock per store; sync route handlers run on
the thread pool, so every read-modify-write happens under the lock. Nothing is
persisted: a restart loses all data.
"""
from __future__ import annotations

import threading
from typing import Optional

from awc_api.exceptions import AlreadyApprovedException, NotFoundException
from awc_api.schemas.blog_comment import BlogCommentOut
from awc_api.schemas.prayer import PrayerCommentOut, PrayerOut, PrayerStats
from awc_api.schemas.testimonial import TestimonialCounts, TestimonialOut
from awc_api.stores.base import BlogCommentStore, PrayerStore, TestimonialStore
from awc_api.utils.datetime import ensure_aware_utc


def _newest_first(records):
    # ids come from an increasing counter, so they break created_at ties by insertion
    return sorted(records, key=lambda r: (r.created_at, int(r.id)), reverse=True)


class _Table:
    """Rows keyed by string id with a monotonically increasing id counter."""

    def __init__(self):
        self.rows: dict = {}
        self._next_id = 1

    def add(self, model, fields: dict):
        fields = dict(fields)
        fields["id"] = str(self._next_id)
        self._next_id += 1
        for key in ("created_at", "approved_at"):
            if key in fields:
                fields[key] = ensure_aware_utc(fields[key])
        record = model.model_validate(fields)
        self.rows[record.id] = record
        return record


class MemoryBlogCommentStore(BlogCommentStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._lock = threading.RLock()
        self._comments = _Table()

    def _insert(self, fields):
        with self._lock:
            return self._comments.add(BlogCommentOut, fields)

    def _update_status(self, comment_id, status):
        with self._lock:
            comment = self._comments.rows.get(comment_id)
            if comment is None:
                raise NotFoundException("Comment not found")
            updated = comment.model_copy(update={"status": status})
            self._comments.rows[comment_id] = updated
            return updated

    def list(self, post_id: Optional[str] = None, status: Optional[str] = None):
        with self._lock:
            items = [
                c for c in self._comments.rows.values()
                if (post_id is None or c.post_id == post_id)
                and (status is None or c.status == status)
            ]
        return _newest_first(items)

    def get(self, comment_id):
        with self._lock:
            comment = self._comments.rows.get(comment_id)
        if comment is None:
            raise NotFoundException("Comment not found")
        return comment

    def delete(self, comment_id):
        with self._lock:
            if self._comments.rows.pop(comment_id, None) is None:
                raise NotFoundException("Comment not found")

    def count(self):
        with self._lock:
            return len(self._comments.rows)


class MemoryPrayerStore(PrayerStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._lock = threading.RLock()
        self._prayers = _Table()
        self._comments = _Table()

    def _insert(self, fields):
        with self._lock:
            return self._prayers.add(PrayerOut, fields)

    def _insert_comment(self, fields):
        with self._lock:
            if fields["prayer_id"] not in self._prayers.rows:
                raise NotFoundException("Prayer not found")
            return self._comments.add(PrayerCommentOut, fields)

    def list(self):
        with self._lock:
            items = list(self._prayers.rows.values())
        return _newest_first(items)

    def get(self, prayer_id):
        with self._lock:
            prayer = self._prayers.rows.get(prayer_id)
        if prayer is None:
            raise NotFoundException("Prayer not found")
        return prayer

    def increment_heart(self, prayer_id):
        with self._lock:
            prayer = self._prayers.rows.get(prayer_id)
            if prayer is None:
                raise NotFoundException("Prayer not found")
            updated = prayer.model_copy(update={"hearts": prayer.hearts + 1})
            self._prayers.rows[prayer_id] = updated
            return updated

    def delete(self, prayer_id):
        with self._lock:
            if self._prayers.rows.pop(prayer_id, None) is None:
                raise NotFoundException("Prayer not found")
            orphaned = [cid for cid, c in self._comments.rows.items() if c.prayer_id == prayer_id]
            for cid in orphaned:
                del self._comments.rows[cid]

    def list_comments(self, prayer_id: Optional[str] = None):
        with self._lock:
            items = [
                c for c in self._comments.rows.values()
                if prayer_id is None or c.prayer_id == prayer_id
            ]
        return _newest_first(items)

    def delete_comment(self, comment_id):
        with self._lock:
            comment = self._comments.rows.pop(comment_id, None)
        if comment is None:
            raise NotFoundException("Comment not found")
        return comment

    def stats(self):
        with self._lock:
            return PrayerStats(
                totalPrayers=len(self._prayers.rows),
                totalHearts=sum(p.hearts for p in self._prayers.rows.values()),
                totalComments=len(self._comments.rows),
            )


class MemoryTestimonialStore(TestimonialStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._lock = threading.RLock()
        self._testimonials = _Table()

    def _insert(self, fields):
        with self._lock:
            return self._testimonials.add(TestimonialOut, fields)

    def list(self, approved: Optional[bool] = None):
        with self._lock:
            items = [
                t for t in self._testimonials.rows.values()
                if approved is None or t.approved == approved
            ]
        return _newest_first(items)

    def get(self, testimonial_id):
        with self._lock:
            testimonial = self._testimonials.rows.get(testimonial_id)
        if testimonial is None:
            raise NotFoundException("Testimonial not found")
        return testimonial

    def approve(self, testimonial_id):
        with self._lock:
            testimonial = self._testimonials.rows.get(testimonial_id)
            if testimonial is None:
                raise NotFoundException("Testimonial not found")
            if testimonial.approved:
                raise AlreadyApprovedException("Testimonial already approved")
            updated = testimonial.model_copy(
                update={"approved": True, "approved_at": ensure_aware_utc(self._clock())}
            )
            self._testimonials.rows[testimonial_id] = updated
            return updated

    def delete(self, testimonial_id):
        with self._lock:
            if self._testimonials.rows.pop(testimonial_id, None) is None:
                raise NotFoundException("Testimonial not found")

    def counts(self):
        with self._lock:
            approved = sum(1 for t in self._testimonials.rows.values() if t.approved)
            total = len(self._testimonials.rows)
        return TestimonialCounts(pending=total - approved, approved=approved, total=total)
