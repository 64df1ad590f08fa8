# --- File: app/schemas/user/user_profile.py ---
"""
Employee profile schemas.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_serializer

from app.schemas.common.base import BaseSchema, BaseUpdateSchema

__all__ = [
    "ProfileResponse",
    "ProfileUpdate",
]


class ProfileResponse(BaseSchema):
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[Date] = None
    job_title: Optional[str] = None
    hire_date: Optional[Date] = None
    salary: Optional[Decimal] = None

    @field_serializer("salary")
    def serialize_salary(self, value: Optional[Decimal]) -> Optional[float]:
        return float(value) if value is not None else None


class ProfileUpdate(BaseUpdateSchema):
    """
    Update profile information.

    Only fields present in the payload are changed.
    """

    first_name: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=100,
        description="First name",
    )
    last_name: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=100,
        description="Last name",
    )
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=500)
    date_of_birth: Optional[Date] = None
    job_title: Optional[str] = Field(default=None, max_length=150)
    salary: Optional[float] = Field(default=None, gt=0, description="Annual salary")
