# --- File: app/schemas/auth/register.py ---
"""
Self-registration schema.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common.base import BaseCreateSchema

__all__ = ["RegisterRequest"]


class RegisterRequest(BaseCreateSchema):
    """
    Public registration request.

    The new user always receives the configured default role; role
    selection is an administrative operation.
    """

    email: EmailStr = Field(
        ...,
        description="Email address (must be unique)",
        examples=["jane.doe@example.com"],
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (min 8 chars)",
    )
    employee_id: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Employee identifier (must be unique)",
        examples=["EMP0042"],
    )
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    department_id: Optional[str] = Field(default=None, description="Department (optional)")
    hire_date: Optional[Date] = Field(default=None, description="Defaults to today")

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: EmailStr) -> str:
        """Normalize email to lowercase."""
        return str(v).lower().strip()

    @field_validator("password", mode="after")
    @classmethod
    def validate_password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Password cannot be empty or whitespace")
        return v
