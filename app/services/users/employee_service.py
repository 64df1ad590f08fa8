# app/services/users/employee_service.py
from __future__ import annotations

import calendar
import secrets
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base.enums import UserStatus
from app.models.performance import PerformanceReview
from app.models.user import Profile, User
from app.repositories.attendance import AttendanceRepository
from app.repositories.leave import LeaveRequestRepository
from app.repositories.performance import GoalRepository, PerformanceReviewRepository
from app.repositories.user import DepartmentRepository, RoleRepository, UserRepository
from app.schemas.attendance.attendance_record import AttendanceSummary
from app.schemas.common.pagination import PaginatedResponse, PaginationParams
from app.schemas.user.user_base import EmployeeCreate, EmployeeFilter, EmployeeUpdate
from app.schemas.user.user_response import EmployeeCreated, EmployeeResponse, EmployeeStats
from app.services.attendance.attendance_service import attendance_rate
from app.services.common import errors, security
from app.services.common.pagination import paginate
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "phone", "job_title", "salary")
TEMPORARY_PASSWORD_BYTES = 12


class EmployeeService:
    """
    Employee records: listing, administrative create/update and
    deactivation, and per-employee activity stats.

    Users are never hard-deleted; deletion sets the status to INACTIVE.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._session_factory = session_factory
        self._tz = tz

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_user_repo(self, uow: UnitOfWork) -> UserRepository:
        return uow.get_repo(UserRepository)

    def _get_user(self, repo: UserRepository, user_id: str) -> User:
        user = repo.find_by_id(user_id)
        if user is None:
            raise errors.NotFoundError("Employee", user_id)
        return user

    def _check_references(
        self,
        uow: UnitOfWork,
        role_id: Optional[str],
        department_id: Optional[str],
    ) -> None:
        if role_id and uow.get_repo(RoleRepository).find_by_id(role_id) is None:
            raise errors.NotFoundError("Role", role_id)
        if department_id and uow.get_repo(DepartmentRepository).find_by_id(department_id) is None:
            raise errors.NotFoundError("Department", department_id)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def list_employees(
        self,
        filters: EmployeeFilter,
        params: PaginationParams,
    ) -> PaginatedResponse[EmployeeResponse]:
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_user_repo(uow)
            items, total = repo.paginate(repo.search_stmt(filters), params.offset, params.limit)
            return paginate(
                items=items,
                total_items=total,
                params=params,
                mapper=EmployeeResponse.from_user,
            )

    def get(self, user_id: str) -> EmployeeResponse:
        with UnitOfWork(self._session_factory) as uow:
            return EmployeeResponse.from_user(self._get_user(self._get_user_repo(uow), user_id))

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def create(self, data: EmployeeCreate) -> EmployeeCreated:
        """
        Create a user with its profile.

        When no password is supplied a temporary one is generated and
        returned once.

        Raises:
            DuplicateIdentity: If the email or employee id is taken
            NotFoundError: Unknown role or department
        """
        temporary_password = None
        password = data.password
        if not password:
            password = temporary_password = secrets.token_urlsafe(TEMPORARY_PASSWORD_BYTES)

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_user_repo(uow)
            if repo.identity_taken(data.email, data.employee_id):
                raise errors.DuplicateIdentity()
            self._check_references(uow, data.role_id, data.department_id)

            user = User(
                employee_id=data.employee_id,
                email=data.email,
                password_hash=security.hash_password(password),
                status=UserStatus.ACTIVE,
                role_id=data.role_id,
                department_id=data.department_id,
                profile=Profile(
                    first_name=data.first_name,
                    last_name=data.last_name,
                    phone=data.phone,
                    job_title=data.job_title,
                    hire_date=data.hire_date,
                    salary=data.salary,
                ),
            )
            try:
                repo.add(user)
            except IntegrityError as exc:
                raise errors.DuplicateIdentity() from exc

            uow.refresh(user)
            employee = EmployeeResponse.from_user(user)

        logger.info("Employee created", extra={"employee_id": employee.employee_id})
        return EmployeeCreated(employee=employee, temporary_password=temporary_password)

    def update(self, user_id: str, data: EmployeeUpdate) -> EmployeeResponse:
        changes = data.changes()
        profile_changes = {k: changes.pop(k) for k in PROFILE_FIELDS if k in changes}

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_user_repo(uow)
            user = self._get_user(repo, user_id)

            if changes.get("email") and repo.email_taken(changes["email"], exclude_user_id=user_id):
                raise errors.DuplicateIdentity()
            self._check_references(uow, changes.get("role_id"), changes.get("department_id"))

            try:
                repo.update(user, changes)
                if profile_changes:
                    if user.profile is None:
                        raise errors.NotFoundError("Profile", user_id)
                    for key, value in profile_changes.items():
                        setattr(user.profile, key, value)
                    uow.flush()
            except IntegrityError as exc:
                raise errors.DuplicateIdentity() from exc

            uow.refresh(user)
            return EmployeeResponse.from_user(user)

    def deactivate(self, user_id: str) -> EmployeeResponse:
        """Soft delete: the user can no longer log in or use tokens."""
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_user_repo(uow)
            user = self._get_user(repo, user_id)
            repo.update(user, {"status": UserStatus.INACTIVE})
            response = EmployeeResponse.from_user(user)

        logger.info("Employee deactivated", extra={"target_user_id": user_id})
        return response

    # ------------------------------------------------------------------ #
    # Stats
    # ------------------------------------------------------------------ #
    def stats(self, user_id: str, *, now: Optional[datetime] = None) -> EmployeeStats:
        today = (now or datetime.now(timezone.utc)).astimezone(self._tz).date()
        start = date(today.year, today.month, 1)
        end = date(today.year, today.month, calendar.monthrange(today.year, today.month)[1])

        with UnitOfWork(self._session_factory) as uow:
            self._get_user(self._get_user_repo(uow), user_id)

            total, present, hours = uow.get_repo(AttendanceRepository).aggregate_for_user(
                user_id, start, end
            )
            by_status = uow.get_repo(LeaveRequestRepository).count_by_status(user_id=user_id)
            reviews = uow.get_repo(PerformanceReviewRepository).count(
                PerformanceReview.user_id == user_id
            )
            goals = sum(uow.get_repo(GoalRepository).count_by_status(user_id=user_id).values())

        return EmployeeStats(
            user_id=user_id,
            attendance_this_month=AttendanceSummary(
                user_id=user_id,
                year=today.year,
                month=today.month,
                total_days=total,
                present_days=present,
                absent_days=total - present,
                total_hours=round(hours, 2),
                attendance_rate=attendance_rate(present, total),
            ),
            leave_requests_by_status=by_status,
            total_leave_requests=sum(by_status.values()),
            performance_reviews=reviews,
            total_goals=goals,
        )
