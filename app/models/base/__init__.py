"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from app.models.base.base_model import Base, BaseModel
from app.models.base.enums import (
    AttendanceStatus,
    GoalStatus,
    LeaveStatus,
    ReviewStatus,
    UserStatus,
)
from app.models.base.mixins import TimestampMixin, ensure_utc, utcnow

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "ensure_utc",
    "utcnow",
    "AttendanceStatus",
    "GoalStatus",
    "LeaveStatus",
    "ReviewStatus",
    "UserStatus",
]
