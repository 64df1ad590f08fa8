# --- File: app/schemas/attendance/time_tracking.py ---
"""
Time tracking entry schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.models.base.mixins import ensure_utc
from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "TimeEntryCreate",
    "TimeEntryUpdate",
    "TimeEntryResponse",
]


class TimeEntryCreate(BaseCreateSchema):
    project_name: Optional[str] = Field(default=None, min_length=2, max_length=200)
    task_description: Optional[str] = Field(default=None, min_length=5, max_length=2000)
    start_time: datetime
    end_time: Optional[datetime] = None
    billable: bool = False

    @model_validator(mode="after")
    def validate_time_order(self):
        if self.end_time is not None and ensure_utc(self.end_time) < ensure_utc(self.start_time):
            raise ValueError("end_time must be after or equal to start_time")
        return self


class TimeEntryUpdate(BaseUpdateSchema):
    project_name: Optional[str] = Field(default=None, min_length=2, max_length=200)
    task_description: Optional[str] = Field(default=None, min_length=5, max_length=2000)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    billable: Optional[bool] = None


class TimeEntryResponse(BaseSchema):
    id: str
    user_id: str
    project_name: Optional[str] = None
    task_description: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    billable: bool
    hours: Optional[float] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def attach_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)
