# --- File: app/schemas/auth/password.py ---
"""
Password management schemas.
"""

from pydantic import EmailStr, Field, field_validator, model_validator

from app.schemas.common.base import BaseCreateSchema

__all__ = [
    "ForgotPasswordRequest",
    "ChangePasswordRequest",
]


class ForgotPasswordRequest(BaseCreateSchema):
    email: EmailStr

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return str(v).lower()


class ChangePasswordRequest(BaseCreateSchema):
    """Authenticated password change; the current password must verify."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)

    @model_validator(mode="after")
    def validate_passwords_differ(self):
        if self.current_password == self.new_password:
            raise ValueError("New password must be different from current password")
        return self
