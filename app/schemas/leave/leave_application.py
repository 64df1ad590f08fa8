# --- File: app/schemas/leave/leave_application.py ---
"""
Leave request schemas: submission, update, decisions, views and filters.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.models.base.enums import LeaveStatus
from app.models.base.mixins import ensure_utc
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "inclusive_days",
    "LeaveRequestCreate",
    "LeaveRequestUpdate",
    "LeaveApproveRequest",
    "LeaveRejectRequest",
    "LeaveRequestResponse",
    "LeaveRequestFilter",
]


def inclusive_days(start_date: Date, end_date: Date) -> int:
    """Number of calendar days covered, counting both ends."""
    return (end_date - start_date).days + 1


class LeaveRequestCreate(BaseCreateSchema):
    """
    Leave submission.

    The number of days is derived from the inclusive date range; no
    balance check happens at submission time.
    """

    leave_type_id: str = Field(..., description="Leave type")
    start_date: Date
    end_date: Date
    reason: str = Field(..., min_length=10, max_length=1000)

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be after or equal to start_date")
        return self

    @property
    def days_requested(self) -> int:
        return inclusive_days(self.start_date, self.end_date)


class LeaveRequestUpdate(BaseUpdateSchema):
    """Edit of a still-pending request."""

    leave_type_id: Optional[str] = None
    start_date: Optional[Date] = None
    end_date: Optional[Date] = None
    reason: Optional[str] = Field(default=None, min_length=10, max_length=1000)

    @model_validator(mode="after")
    def validate_date_range(self):
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        ):
            raise ValueError("end_date must be after or equal to start_date")
        return self


class LeaveApproveRequest(BaseCreateSchema):
    comments: Optional[str] = Field(default=None, max_length=1000)


class LeaveRejectRequest(BaseCreateSchema):
    comments: Optional[str] = Field(default=None, max_length=1000)


class LeaveRequestResponse(BaseSchema):
    id: str
    user_id: str
    employee_name: Optional[str] = None
    leave_type_id: str
    leave_type_name: Optional[str] = None
    start_date: Date
    end_date: Date
    days_requested: int
    reason: str
    status: LeaveStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    comments: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("approved_at", "created_at")
    @classmethod
    def attach_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    @classmethod
    def from_request(cls, request) -> "LeaveRequestResponse":
        response = cls.model_validate(request)
        response.employee_name = request.user.full_name if request.user else None
        response.leave_type_name = request.leave_type.name if request.leave_type else None
        return response


class LeaveRequestFilter(BaseFilterSchema):
    status: Optional[LeaveStatus] = None
    user_id: Optional[str] = None
    leave_type_id: Optional[str] = None
