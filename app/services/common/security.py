# app/services/common/security.py
"""
Security utilities for authentication.

Provides password hashing with bcrypt and JWT token management.
Access and refresh tokens are signed with distinct secrets and carry
only the user identifier plus the token type.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Literal, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from .errors import InvalidToken, ValidationError

TokenType = Literal["access", "refresh"]

DEFAULT_BCRYPT_ROUNDS = 12


# ------------------------------------------------------------------ #
# Configuration
# ------------------------------------------------------------------ #

def _build_context(rounds: int) -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=rounds,
    )


_pwd_context = _build_context(DEFAULT_BCRYPT_ROUNDS)


def configure_password_hashing(rounds: int) -> None:
    """Rebuild the hashing context with a new bcrypt cost factor."""
    global _pwd_context
    _pwd_context = _build_context(rounds)


@dataclass(frozen=True)
class JWTSettings:
    """
    JWT configuration settings.

    Example:
        >>> jwt_settings = JWTSettings(
        ...     secret_key=settings.JWT_SECRET_KEY,
        ...     refresh_secret_key=settings.JWT_REFRESH_SECRET_KEY,
        ...     access_token_expires_minutes=15,
        ...     refresh_token_expires_days=7,
        ... )
    """
    secret_key: str
    refresh_secret_key: str
    algorithm: str = "HS256"
    access_token_expires_minutes: int = 15
    refresh_token_expires_days: int = 7

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.secret_key or not self.refresh_secret_key:
            raise ValueError("JWT secret keys cannot be empty")
        if self.secret_key == self.refresh_secret_key:
            raise ValueError("Access and refresh tokens must use distinct secrets")
        if self.access_token_expires_minutes <= 0:
            raise ValueError("access_token_expires_minutes must be positive")
        if self.refresh_token_expires_days <= 0:
            raise ValueError("refresh_token_expires_days must be positive")

    def secret_for(self, token_type: TokenType) -> str:
        return self.secret_key if token_type == "access" else self.refresh_secret_key

    def lifetime_for(self, token_type: TokenType) -> timedelta:
        if token_type == "access":
            return timedelta(minutes=self.access_token_expires_minutes)
        return timedelta(days=self.refresh_token_expires_days)


# ------------------------------------------------------------------ #
# Password hashing
# ------------------------------------------------------------------ #

def _prepare_password_for_bcrypt(password: str) -> str:
    """
    Prepare a password for bcrypt by handling the 72-byte limit.

    Passwords that might exceed the limit are replaced by their SHA-256
    hex digest, which is well under it.
    """
    if len(password.encode('utf-8')) > 71:
        return hashlib.sha256(password.encode('utf-8')).hexdigest()
    return password


def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    Raises:
        ValidationError: If password is empty
    """
    if not password:
        raise ValidationError("Password cannot be empty", field="password")

    return _pwd_context.hash(_prepare_password_for_bcrypt(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored hash.

    Malformed hashes verify as False rather than raising.
    """
    if not plain_password or not hashed_password:
        return False

    try:
        return _pwd_context.verify(
            _prepare_password_for_bcrypt(plain_password),
            hashed_password,
        )
    except (ValueError, TypeError):
        return False


# ------------------------------------------------------------------ #
# JWT utilities
# ------------------------------------------------------------------ #

def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def create_token(
    *,
    subject: str,
    token_type: TokenType,
    jwt_settings: JWTSettings,
    now: Optional[datetime] = None,
) -> str:
    """
    Create a signed JWT of the given type for a user id.

    Example:
        >>> token = create_token(
        ...     subject=user.id,
        ...     token_type="access",
        ...     jwt_settings=settings.jwt_settings,
        ... )
    """
    issued_at = now or _utcnow()
    expire = issued_at + jwt_settings.lifetime_for(token_type)

    payload: dict[str, Any] = {
        "sub": str(subject),
        "type": token_type,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }

    return jwt.encode(
        payload,
        jwt_settings.secret_for(token_type),
        algorithm=jwt_settings.algorithm,
    )


def create_access_token(*, subject: str, jwt_settings: JWTSettings) -> str:
    return create_token(subject=subject, token_type="access", jwt_settings=jwt_settings)


def create_refresh_token(*, subject: str, jwt_settings: JWTSettings) -> str:
    return create_token(subject=subject, token_type="refresh", jwt_settings=jwt_settings)


def decode_token(
    token: str,
    jwt_settings: JWTSettings,
    *,
    expected_type: TokenType,
) -> dict[str, Any]:
    """
    Decode and validate a JWT token of the expected type.

    The signature is checked against the secret of `expected_type`, so a
    refresh token never verifies as an access token and vice versa.

    Raises:
        InvalidToken: If the token is malformed, expired, of the wrong
            type, or missing its subject.
    """
    try:
        payload = jwt.decode(
            token,
            jwt_settings.secret_for(expected_type),
            algorithms=[jwt_settings.algorithm],
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidToken("Token has expired") from exc
    except JWTError as exc:
        raise InvalidToken("Invalid or malformed token") from exc

    if payload.get("type") != expected_type:
        raise InvalidToken(f"Expected {expected_type} token")

    if not payload.get("sub"):
        raise InvalidToken("Token missing user identifier")

    return payload


def extract_user_id(
    token: str,
    jwt_settings: JWTSettings,
    *,
    expected_type: TokenType = "access",
) -> str:
    """Decode a token and return its subject (user id)."""
    return str(decode_token(token, jwt_settings, expected_type=expected_type)["sub"])
