# --- File: app/schemas/leave/leave_type.py ---
"""
Leave type schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "LeaveTypeCreate",
    "LeaveTypeUpdate",
    "LeaveTypeResponse",
]


class LeaveTypeCreate(BaseCreateSchema):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    max_days_per_year: int = Field(..., ge=1, le=366)
    carry_forward: bool = False


class LeaveTypeUpdate(BaseUpdateSchema):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    max_days_per_year: Optional[int] = Field(default=None, ge=1, le=366)
    carry_forward: Optional[bool] = None
    is_active: Optional[bool] = None


class LeaveTypeResponse(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None
    max_days_per_year: int
    carry_forward: bool
    is_active: bool
