from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from awc_api.schemas.common import RecordOut


class PrayerCreate(BaseModel):
    name: Optional[str] = None
    request: Optional[str] = None
    anonymous: bool = False


class PrayerOut(RecordOut):
    name: str
    request: str
    hearts: int = Field(0, ge=0)
    anonymous: bool = False

    @computed_field
    @property
    def date(self) -> datetime:
        """Older wall pages read ``date`` rather than ``created_at``."""
        return self.created_at


class PrayerCommentCreate(BaseModel):
    author_name: Optional[str] = None
    content: Optional[str] = None
    anonymous: bool = False


class PrayerCommentOut(RecordOut):
    prayer_id: str
    author_name: str
    content: str
    anonymous: bool = False

    @field_validator("prayer_id", mode="before")
    @classmethod
    def _prayer_id_as_str(cls, v: Any) -> str:
        return str(v)


class PrayerStats(BaseModel):
    totalPrayers: int
    totalHearts: int
    totalComments: int
