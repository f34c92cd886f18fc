from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from awc_api.schemas.common import RecordOut
from awc_api.utils.datetime import ensure_aware_utc


class TestimonialCreate(BaseModel):
    name: Optional[str] = None
    testimony: Optional[str] = None
    anonymous: bool = False


class TestimonialOut(RecordOut):
    name: str
    testimony: str
    anonymous: bool = False
    approved: bool = False
    approved_at: Optional[datetime] = None

    @field_validator("approved_at", mode="after")
    @classmethod
    def _aware_approved_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware_utc(v)


class TestimonialCounts(BaseModel):
    pending: int
    approved: int
    total: int
