# --- File: app/schemas/auth/__init__.py ---
"""
Authentication schemas package.

Example:
    from app.schemas.auth import LoginRequest, RegisterRequest, TokenPair
"""

from app.schemas.auth.login import LoginRequest, LoginResponse
from app.schemas.auth.password import ChangePasswordRequest, ForgotPasswordRequest
from app.schemas.auth.register import RegisterRequest
from app.schemas.auth.token import RefreshTokenRequest, TokenPair

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "ChangePasswordRequest",
    "ForgotPasswordRequest",
    "RegisterRequest",
    "RefreshTokenRequest",
    "TokenPair",
]
