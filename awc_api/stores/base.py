"""Record store interfaces shared by the in-memory and database backends.

The public ``create``/``set_status`` methods validate input and stamp server-side
fields (``created_at`` from the injected clock, the ``Anonymous`` sentinel) before
handing a plain dict to the backend's ``_insert``. Every other operation is
implemented by the backend so it can be made atomic in the backend's own way.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Iterable, Optional

from awc_api.exceptions import InvalidStatusException, ValidationException
from awc_api.schemas.blog_comment import COMMENT_STATUSES, BlogCommentOut
from awc_api.schemas.prayer import PrayerCommentOut, PrayerOut, PrayerStats
from awc_api.schemas.testimonial import TestimonialCounts, TestimonialOut
from awc_api.utils.datetime import utc_now

Clock = Callable[[], datetime]

ANONYMOUS = "Anonymous"
DEFAULT_COMMENT_MAX_LENGTH = 1000
DEFAULT_TESTIMONY_MAX_LENGTH = 2000
AUTHOR_NAME_MAX_LENGTH = 100
AUTHOR_EMAIL_MAX_LENGTH = 254


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def display_name(name: Optional[str], anonymous: bool) -> str:
    """Name stored for a submission; anonymous or blank names become ``Anonymous``."""
    if anonymous:
        return ANONYMOUS
    cleaned = _clean(name)
    if len(cleaned) > AUTHOR_NAME_MAX_LENGTH:
        raise ValidationException(f"Name must be less than {AUTHOR_NAME_MAX_LENGTH} characters")
    return cleaned or ANONYMOUS


class BlogCommentStore(ABC):
    """Comments left under blog posts, keyed by post id."""

    def __init__(self, clock: Clock = utc_now, max_length: int = DEFAULT_COMMENT_MAX_LENGTH):
        self._clock = clock
        self.max_length = max_length

    def create(
        self,
        post_id: str,
        author_name: Optional[str],
        content: Optional[str],
        author_email: Optional[str] = None,
    ) -> BlogCommentOut:
        name = _clean(author_name)
        body = _clean(content)
        if not name or not body:
            raise ValidationException("Author name and content are required")
        if len(name) > AUTHOR_NAME_MAX_LENGTH:
            raise ValidationException(f"Author name must be less than {AUTHOR_NAME_MAX_LENGTH} characters")
        if len(body) > self.max_length:
            raise ValidationException(f"Comment must be less than {self.max_length} characters")
        email = _clean(author_email) or None
        if email and len(email) > AUTHOR_EMAIL_MAX_LENGTH:
            raise ValidationException("Author email is too long")
        return self._insert({
            "post_id": post_id,
            "author_name": name,
            "author_email": email,
            "content": body,
            "status": "approved",
            "created_at": self._clock(),
        })

    def set_status(self, comment_id: str, status: Optional[str]) -> BlogCommentOut:
        if status not in COMMENT_STATUSES:
            raise InvalidStatusException(
                f"Invalid status. Must be one of: {', '.join(COMMENT_STATUSES)}"
            )
        return self._update_status(comment_id, status)

    @abstractmethod
    def _insert(self, fields: dict) -> BlogCommentOut: ...

    @abstractmethod
    def _update_status(self, comment_id: str, status: str) -> BlogCommentOut: ...

    @abstractmethod
    def list(self, post_id: Optional[str] = None, status: Optional[str] = None) -> list[BlogCommentOut]:
        """Comments newest first, optionally filtered by post and status."""

    @abstractmethod
    def get(self, comment_id: str) -> BlogCommentOut: ...

    @abstractmethod
    def delete(self, comment_id: str) -> None: ...

    @abstractmethod
    def count(self) -> int: ...


class PrayerStore(ABC):
    """Prayer wall: prayers, their heart counts and their comments."""

    def __init__(self, clock: Clock = utc_now, comment_max_length: int = DEFAULT_COMMENT_MAX_LENGTH):
        self._clock = clock
        self.comment_max_length = comment_max_length

    def create(self, name: Optional[str], request: Optional[str], anonymous: bool = False) -> PrayerOut:
        text = _clean(request)
        if not text:
            raise ValidationException("Prayer request required")
        return self._insert({
            "name": display_name(name, anonymous),
            "request": text,
            "hearts": 0,
            "anonymous": bool(anonymous),
            "created_at": self._clock(),
        })

    def create_comment(
        self,
        prayer_id: str,
        author_name: Optional[str],
        content: Optional[str],
        anonymous: bool = False,
    ) -> PrayerCommentOut:
        """Add a comment; raises NotFoundException when the prayer does not exist."""
        body = _clean(content)
        if not body:
            raise ValidationException("Comment content required")
        if len(body) > self.comment_max_length:
            raise ValidationException(f"Comment must be less than {self.comment_max_length} characters")
        return self._insert_comment({
            "prayer_id": prayer_id,
            "author_name": display_name(author_name, anonymous),
            "content": body,
            "anonymous": bool(anonymous),
            "created_at": self._clock(),
        })

    def load(self, prayers: Iterable[dict]) -> list[PrayerOut]:
        """Insert prepared prayer records as-is (used for seeding)."""
        return [self._insert(dict(p)) for p in prayers]

    @abstractmethod
    def _insert(self, fields: dict) -> PrayerOut: ...

    @abstractmethod
    def _insert_comment(self, fields: dict) -> PrayerCommentOut: ...

    @abstractmethod
    def list(self) -> list[PrayerOut]: ...

    @abstractmethod
    def get(self, prayer_id: str) -> PrayerOut: ...

    @abstractmethod
    def increment_heart(self, prayer_id: str) -> PrayerOut: ...

    @abstractmethod
    def delete(self, prayer_id: str) -> None:
        """Remove the prayer and every comment attached to it."""

    @abstractmethod
    def list_comments(self, prayer_id: Optional[str] = None) -> list[PrayerCommentOut]: ...

    @abstractmethod
    def delete_comment(self, comment_id: str) -> PrayerCommentOut: ...

    @abstractmethod
    def stats(self) -> PrayerStats: ...


class TestimonialStore(ABC):
    """Testimonies awaiting or having received pastoral approval."""

    def __init__(self, clock: Clock = utc_now, max_length: int = DEFAULT_TESTIMONY_MAX_LENGTH):
        self._clock = clock
        self.max_length = max_length

    def create(self, name: Optional[str], testimony: Optional[str], anonymous: bool = False) -> TestimonialOut:
        text = _clean(testimony)
        if not text:
            raise ValidationException("Testimony content required")
        if len(testimony) > self.max_length:
            raise ValidationException(f"Testimony must be less than {self.max_length} characters")
        if not anonymous and not _clean(name):
            raise ValidationException("Name required when not submitting anonymously")
        return self._insert({
            "name": display_name(name, anonymous),
            "testimony": text,
            "anonymous": bool(anonymous),
            "approved": False,
            "created_at": self._clock(),
            "approved_at": None,
        })

    def load(self, testimonials: Iterable[dict]) -> list[TestimonialOut]:
        return [self._insert(dict(t)) for t in testimonials]

    @abstractmethod
    def _insert(self, fields: dict) -> TestimonialOut: ...

    @abstractmethod
    def list(self, approved: Optional[bool] = None) -> list[TestimonialOut]: ...

    @abstractmethod
    def get(self, testimonial_id: str) -> TestimonialOut: ...

    @abstractmethod
    def approve(self, testimonial_id: str) -> TestimonialOut:
        """pending -> approved; AlreadyApprovedException if already approved."""

    @abstractmethod
    def delete(self, testimonial_id: str) -> None: ...

    @abstractmethod
    def counts(self) -> TestimonialCounts: ...
