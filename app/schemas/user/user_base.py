# --- File: app/schemas/user/user_base.py ---
"""
Employee create/update payloads and the employee listing filter.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.models.base.enums import UserStatus
from app.schemas.common.base import BaseCreateSchema, BaseFilterSchema, BaseUpdateSchema

__all__ = [
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeFilter",
    "EMPLOYEE_SORT_FIELDS",
]

EMPLOYEE_SORT_FIELDS = ("created_at", "updated_at", "email", "employee_id", "status")


class EmployeeCreate(BaseCreateSchema):
    """
    Administrative creation of a user together with its profile.

    When `password` is omitted a temporary one is generated and returned
    once in the response.
    """

    email: EmailStr
    employee_id: str = Field(..., min_length=3, max_length=50)
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    role_id: str = Field(..., description="Role to assign")
    department_id: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=30)
    job_title: Optional[str] = Field(default=None, max_length=150)
    hire_date: Date
    salary: Optional[float] = Field(default=None, gt=0)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class EmployeeUpdate(BaseUpdateSchema):
    """Partial update of user fields and profile fields."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    job_title: Optional[str] = Field(default=None, max_length=150)
    department_id: Optional[str] = None
    role_id: Optional[str] = None
    salary: Optional[float] = Field(default=None, gt=0)
    status: Optional[UserStatus] = None

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class EmployeeFilter(BaseFilterSchema):
    """Explicit filter for the employee listing."""

    search: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Matches employee id, email, first or last name",
    )
    department_id: Optional[str] = None
    status: Optional[UserStatus] = None
    sort_by: str = Field(default="created_at", description="One of the allowed sort fields")
    sort_order: str = Field(default="desc", pattern=r"^(asc|desc)$")

    @field_validator("sort_by")
    @classmethod
    def validate_sort_by(cls, v: str) -> str:
        if v not in EMPLOYEE_SORT_FIELDS:
            raise ValueError(f"sort_by must be one of: {', '.join(EMPLOYEE_SORT_FIELDS)}")
        return v
