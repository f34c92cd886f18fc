from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from awc_api.utils.datetime import ensure_aware_utc


class RecordOut(BaseModel):
    """Base for stored records: string ids, aware UTC timestamps."""

    id: str
    created_at: datetime

    model_config = {
        'from_attributes': True
    }

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> str:
        return str(v)

    @field_validator("created_at", mode="after")
    @classmethod
    def _aware_created_at(cls, v: datetime) -> datetime:
        return ensure_aware_utc(v)
