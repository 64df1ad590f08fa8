# --- File: app/schemas/auth/token.py ---
"""
Token refresh schemas.
"""

from __future__ import annotations

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "RefreshTokenRequest",
    "TokenPair",
]


class RefreshTokenRequest(BaseCreateSchema):
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class TokenPair(BaseSchema):
    """
    Access/refresh token pair.

    Standard OAuth 2.0 bearer format.
    """

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type (always 'bearer')")
