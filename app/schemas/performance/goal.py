# --- File: app/schemas/performance/goal.py ---
"""
Goal schemas.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Optional

from pydantic import Field

from app.models.base.enums import GoalStatus
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "GoalCreate",
    "GoalUpdate",
    "GoalResponse",
    "GoalFilter",
]


class GoalCreate(BaseCreateSchema):
    user_id: str
    title: str = Field(..., min_length=5, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    target_date: Optional[Date] = None
    progress: int = Field(default=0, ge=0, le=100)
    status: GoalStatus = GoalStatus.NOT_STARTED


class GoalUpdate(BaseUpdateSchema):
    title: Optional[str] = Field(default=None, min_length=5, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    target_date: Optional[Date] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    status: Optional[GoalStatus] = None


class GoalResponse(BaseSchema):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    target_date: Optional[Date] = None
    progress: int
    status: GoalStatus
    created_at: Optional[datetime] = None


class GoalFilter(BaseFilterSchema):
    user_id: Optional[str] = None
    status: Optional[GoalStatus] = None
