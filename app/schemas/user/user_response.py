# --- File: app/schemas/user/user_response.py ---
"""
User and employee response schemas.

Password hashes never appear in any of these.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Dict, Optional

from pydantic import Field

from app.models.base.enums import UserStatus
from app.schemas.attendance.attendance_record import AttendanceSummary
from app.schemas.common.base import BaseSchema
from app.schemas.user.user_profile import ProfileResponse

if TYPE_CHECKING:
    from app.models.user import User

__all__ = [
    "UserSummary",
    "EmployeeResponse",
    "EmployeeCreated",
    "EmployeeStats",
]


class UserSummary(BaseSchema):
    """Identity summary returned by login, register and /me."""

    id: str
    employee_id: str
    email: str
    role: str
    department: Optional[str] = None
    status: UserStatus
    profile: Optional[ProfileResponse] = None

    @classmethod
    def from_user(cls, user: "User") -> "UserSummary":
        return cls(
            id=user.id,
            employee_id=user.employee_id,
            email=user.email,
            role=user.role.name,
            department=user.department.name if user.department else None,
            status=user.status,
            profile=ProfileResponse.model_validate(user.profile) if user.profile else None,
        )


class EmployeeResponse(UserSummary):
    role_id: str
    department_id: Optional[str] = None
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: "User") -> "EmployeeResponse":
        summary = UserSummary.from_user(user)
        return cls(
            **summary.model_dump(exclude={"profile"}),
            profile=summary.profile,
            role_id=user.role_id,
            department_id=user.department_id,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class EmployeeCreated(BaseSchema):
    employee: EmployeeResponse
    temporary_password: Optional[str] = Field(
        default=None,
        description="Generated password, returned once when none was supplied",
    )


class EmployeeStats(BaseSchema):
    """Activity counters for one employee."""

    user_id: str
    attendance_this_month: AttendanceSummary
    leave_requests_by_status: Dict[str, int]
    total_leave_requests: int
    performance_reviews: int
    total_goals: int
