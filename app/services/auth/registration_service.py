# app/services/auth/registration_service.py
from __future__ import annotations

from datetime import date
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base.enums import UserStatus
from app.models.user import Profile, User
from app.repositories.user import DepartmentRepository, RoleRepository, UserRepository
from app.schemas.auth.register import RegisterRequest
from app.schemas.user.user_response import UserSummary
from app.services.common import errors, security
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


class RegistrationService:
    """
    Public-facing user registration.

    Design:
    - Self-registration always assigns the configured default role.
    - Other roles are granted by an administrator through the employee
      endpoints.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        default_role: str = "Employee",
    ) -> None:
        self._session_factory = session_factory
        self._default_role = default_role

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_user_repo(self, uow: UnitOfWork) -> UserRepository:
        return uow.get_repo(UserRepository)

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def register(self, data: RegisterRequest) -> UserSummary:
        """
        Register a new user with an empty-but-named profile.

        Raises:
            DuplicateIdentity: If the email or employee id is taken
            NotFoundError: If the department or default role is missing
        """
        hashed_pwd = security.hash_password(data.password)

        with UnitOfWork(self._session_factory) as uow:
            user_repo = self._get_user_repo(uow)

            if user_repo.identity_taken(data.email, data.employee_id):
                raise errors.DuplicateIdentity()

            role = uow.get_repo(RoleRepository).get_by_name(self._default_role)
            if role is None:
                raise errors.NotFoundError("Role", self._default_role)

            if data.department_id and uow.get_repo(DepartmentRepository).find_by_id(
                data.department_id
            ) is None:
                raise errors.NotFoundError("Department", data.department_id)

            user = User(
                employee_id=data.employee_id,
                email=data.email,
                password_hash=hashed_pwd,
                status=UserStatus.ACTIVE,
                role=role,
                department_id=data.department_id,
                profile=Profile(
                    first_name=data.first_name,
                    last_name=data.last_name,
                    hire_date=data.hire_date or date.today(),
                ),
            )
            try:
                user_repo.add(user)
            except IntegrityError as exc:
                raise errors.DuplicateIdentity() from exc

            summary = UserSummary.from_user(user)

        logger.info("User registered", extra={"user_id": summary.id})
        return summary
