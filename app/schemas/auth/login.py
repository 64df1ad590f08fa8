# --- File: app/schemas/auth/login.py ---
"""
Login schemas.
"""

from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from app.schemas.common.base import BaseCreateSchema, BaseSchema
from app.schemas.user.user_response import UserSummary

__all__ = [
    "LoginRequest",
    "LoginResponse",
]


class LoginRequest(BaseCreateSchema):
    """
    Email/password login request.

    The email is normalized to lowercase before lookup.
    """

    email: EmailStr = Field(
        ...,
        description="User email address",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="User password",
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return str(v).lower()


class LoginResponse(BaseSchema):
    """Identity summary plus a fresh token pair."""

    user: UserSummary
    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
