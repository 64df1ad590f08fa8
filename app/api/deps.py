# app/api/deps.py
"""
FastAPI dependencies: session factory, current principal, permission
gates, pagination and service construction.

Services are cheap and stateless apart from their session factory, so a
fresh one is built per request from the factory stored on app.state.

Example usage in a router:
    @router.get("/employees", dependencies=[Depends(require_permission(Permission.EMPLOYEES_READ))])
    def list_employees(service: EmployeeServiceDep, pagination: PaginationDep):
        ...
"""
from typing import Annotated, Callable, Optional

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.config.settings import Settings, get_settings
from app.core.logging import user_id as user_id_var
from app.schemas.common.pagination import PaginationParams
from app.services.attendance import AttendanceService, TimeTrackingService
from app.services.auth import AuthService, RegistrationService
from app.services.common import errors, permissions
from app.services.common.permissions import Permission, Principal, RoleName
from app.services.leave import LeaveBalanceService, LeaveRequestService, LeaveTypeService
from app.services.performance import PerformanceService
from app.services.recruitment import RecruitmentService
from app.services.reports import ReportService
from app.services.users import EmployeeService, UserProfileService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


# --- Settings & database -------------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_session_factory(request: Request) -> Callable[[], Session]:
    return request.app.state.session_factory


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
SessionFactoryDep = Annotated[Callable[[], Session], Depends(get_session_factory)]


# --- Services ------------------------------------------------------------------

def get_auth_service(session_factory: SessionFactoryDep, settings: SettingsDep) -> AuthService:
    return AuthService(session_factory, settings.jwt_settings)


def get_registration_service(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
) -> RegistrationService:
    return RegistrationService(session_factory, default_role=settings.DEFAULT_ROLE)


def get_attendance_service(session_factory: SessionFactoryDep, settings: SettingsDep) -> AttendanceService:
    return AttendanceService(session_factory, tz=settings.tzinfo)


def get_time_tracking_service(session_factory: SessionFactoryDep) -> TimeTrackingService:
    return TimeTrackingService(session_factory)


def get_leave_request_service(
    session_factory: SessionFactoryDep,
    settings: SettingsDep,
) -> LeaveRequestService:
    return LeaveRequestService(session_factory, enforce_balance=settings.LEAVE_BALANCE_ENFORCED)


def get_leave_balance_service(session_factory: SessionFactoryDep) -> LeaveBalanceService:
    return LeaveBalanceService(session_factory)


def get_leave_type_service(session_factory: SessionFactoryDep) -> LeaveTypeService:
    return LeaveTypeService(session_factory)


def get_employee_service(session_factory: SessionFactoryDep, settings: SettingsDep) -> EmployeeService:
    return EmployeeService(session_factory, tz=settings.tzinfo)


def get_profile_service(session_factory: SessionFactoryDep) -> UserProfileService:
    return UserProfileService(session_factory)


def get_performance_service(session_factory: SessionFactoryDep) -> PerformanceService:
    return PerformanceService(session_factory)


def get_recruitment_service(session_factory: SessionFactoryDep) -> RecruitmentService:
    return RecruitmentService(session_factory)


def get_report_service(session_factory: SessionFactoryDep, settings: SettingsDep) -> ReportService:
    return ReportService(session_factory, tz=settings.tzinfo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
AttendanceServiceDep = Annotated[AttendanceService, Depends(get_attendance_service)]
TimeTrackingServiceDep = Annotated[TimeTrackingService, Depends(get_time_tracking_service)]
LeaveRequestServiceDep = Annotated[LeaveRequestService, Depends(get_leave_request_service)]
LeaveBalanceServiceDep = Annotated[LeaveBalanceService, Depends(get_leave_balance_service)]
LeaveTypeServiceDep = Annotated[LeaveTypeService, Depends(get_leave_type_service)]
EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]
ProfileServiceDep = Annotated[UserProfileService, Depends(get_profile_service)]
PerformanceServiceDep = Annotated[PerformanceService, Depends(get_performance_service)]
RecruitmentServiceDep = Annotated[RecruitmentService, Depends(get_recruitment_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]


# --- Authentication & authorization --------------------------------------------

async def get_current_principal(
    auth_service: AuthServiceDep,
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
) -> Principal:
    """
    Resolve the bearer token into a fresh Principal.

    Runs as a coroutine so the logging context set here is inherited by
    the route handler; the lookup itself goes to the thread pool.
    """
    if not token:
        raise errors.InvalidToken("Not authenticated")

    principal = await run_in_threadpool(auth_service.authenticate, token)
    user_id_var.set(principal.user_id)
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def require_permission(permission: Permission) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold `permission`."""

    def dependency(principal: CurrentPrincipal) -> Principal:
        permissions.require_permission(principal, permission)
        return principal

    return dependency


def require_role(*roles: RoleName) -> Callable[..., Principal]:
    """Dependency factory: the caller's role must be one of `roles`."""

    def dependency(principal: CurrentPrincipal) -> Principal:
        permissions.require_role(principal, roles)
        return principal

    return dependency


# --- Pagination ----------------------------------------------------------------

def get_pagination_params(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)


PaginationDep = Annotated[PaginationParams, Depends(get_pagination_params)]


__all__ = [
    "oauth2_scheme",
    "get_app_settings",
    "get_session_factory",
    "get_current_principal",
    "require_permission",
    "require_role",
    "get_pagination_params",
    "SettingsDep",
    "SessionFactoryDep",
    "CurrentPrincipal",
    "PaginationDep",
    "AuthServiceDep",
    "RegistrationServiceDep",
    "AttendanceServiceDep",
    "TimeTrackingServiceDep",
    "LeaveRequestServiceDep",
    "LeaveBalanceServiceDep",
    "LeaveTypeServiceDep",
    "EmployeeServiceDep",
    "ProfileServiceDep",
    "PerformanceServiceDep",
    "RecruitmentServiceDep",
    "ReportServiceDep",
]
