# app/services/auth/auth_service.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base.enums import UserStatus
from app.repositories.user import UserRepository
from app.schemas.auth.login import LoginRequest, LoginResponse
from app.schemas.auth.password import ChangePasswordRequest
from app.schemas.auth.token import TokenPair
from app.schemas.user.user_response import UserSummary
from app.services.common import errors, security
from app.services.common.permissions import Principal
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)

FORGOT_PASSWORD_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)


class AuthService:
    """
    Authentication service:

    - Email/password login
    - Refresh token handling
    - Per-request principal resolution
    - Password change and reset requests

    Tokens carry only the user id; everything else is re-read from the
    store on each request. There is no revocation list, so logout is a
    client-side operation.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        jwt_settings: security.JWTSettings,
    ) -> None:
        self._session_factory = session_factory
        self._jwt_settings = jwt_settings

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _get_user_repo(self, uow: UnitOfWork) -> UserRepository:
        return uow.get_repo(UserRepository)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _issue_tokens(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=security.create_access_token(
                subject=user_id,
                jwt_settings=self._jwt_settings,
            ),
            refresh_token=security.create_refresh_token(
                subject=user_id,
                jwt_settings=self._jwt_settings,
            ),
        )

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #
    def login(self, data: LoginRequest) -> LoginResponse:
        """
        Email/password login.

        Unknown email and wrong password raise the same InvalidCredentials.
        A matched but non-active account raises AccountNotActive before
        the password is checked.
        """
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_user_repo(uow)
            user = repo.get_by_email(data.email)

            if user is None:
                raise errors.InvalidCredentials()

            if user.status != UserStatus.ACTIVE:
                logger.warning("Login attempt on non-active account", extra={"user_id": user.id})
                raise errors.AccountNotActive()

            if not security.verify_password(data.password, user.password_hash):
                raise errors.InvalidCredentials()

            user.last_login_at = self._now()
            uow.flush()

            tokens = self._issue_tokens(user.id)
            summary = UserSummary.from_user(user)

        logger.info("User logged in", extra={"user_id": summary.id})
        return LoginResponse(
            user=summary,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #
    def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new token pair.

        Raises:
            InvalidToken: Bad signature, expired, wrong token type, or the
                user no longer resolves to an active account.
        """
        user_id = security.extract_user_id(
            refresh_token,
            self._jwt_settings,
            expected_type="refresh",
        )
        with UnitOfWork(self._session_factory) as uow:
            user = self._get_user_repo(uow).find_by_id(user_id)
            if user is None or user.status != UserStatus.ACTIVE:
                raise errors.InvalidToken()

        return self._issue_tokens(user_id)

    # ------------------------------------------------------------------ #
    # Request identity
    # ------------------------------------------------------------------ #
    def authenticate(self, access_token: str) -> Principal:
        """Decode an access token and resolve the caller fresh from the store."""
        user_id = security.extract_user_id(
            access_token,
            self._jwt_settings,
            expected_type="access",
        )
        return self.resolve_principal(user_id)

    def resolve_principal(self, user_id: str) -> Principal:
        with UnitOfWork(self._session_factory) as uow:
            user = self._get_user_repo(uow).find_by_id(user_id)
            if user is None or user.status != UserStatus.ACTIVE:
                raise errors.InvalidToken("User not found or inactive")

            return Principal(
                user_id=user.id,
                employee_id=user.employee_id,
                email=user.email,
                role=user.role.name,
                permissions=user.role.permission_set,
            )

    def me(self, user_id: str) -> UserSummary:
        with UnitOfWork(self._session_factory) as uow:
            user = self._get_user_repo(uow).find_by_id(user_id)
            if user is None:
                raise errors.NotFoundError("User", user_id)
            return UserSummary.from_user(user)

    # ------------------------------------------------------------------ #
    # Passwords
    # ------------------------------------------------------------------ #
    def change_password(self, user_id: str, data: ChangePasswordRequest) -> None:
        """
        Change the caller's password.

        Raises:
            InvalidCredentials: If the current password does not verify
        """
        with UnitOfWork(self._session_factory) as uow:
            user = self._get_user_repo(uow).find_by_id(user_id)
            if user is None:
                raise errors.NotFoundError("User", user_id)

            if not security.verify_password(data.current_password, user.password_hash):
                raise errors.InvalidCredentials()

            user.password_hash = security.hash_password(data.new_password)
            uow.flush()

        logger.info("Password changed", extra={"user_id": user_id})

    def forgot_password(self, email: str) -> str:
        """
        Record a password reset request.

        The returned message is the same whether or not the account
        exists. Delivery of the reset link is outside this service.
        """
        with UnitOfWork(self._session_factory) as uow:
            user = self._get_user_repo(uow).get_by_email(email)
            if user is not None:
                logger.info("Password reset requested", extra={"user_id": user.id})

        return FORGOT_PASSWORD_MESSAGE

    def logout(self, user_id: str) -> None:
        """Tokens stay valid until expiry; the client discards them."""
        logger.info("User logged out", extra={"user_id": user_id})
