"""
Employee records: listing, administrative CRUD, profiles and per-employee
statistics.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import (
    CurrentPrincipal,
    EmployeeServiceDep,
    PaginationDep,
    ProfileServiceDep,
    require_permission,
)
from app.models.base.enums import UserStatus
from app.schemas.common.pagination import PaginatedResponse
from app.schemas.common.response import SuccessResponse
from app.schemas.user import (
    EmployeeCreate,
    EmployeeCreated,
    EmployeeFilter,
    EmployeeResponse,
    EmployeeStats,
    EmployeeUpdate,
    ProfileResponse,
    ProfileUpdate,
)
from app.services.common.permissions import (
    Permission,
    PermissionDenied,
    has_permission,
    require_owner_or_permission,
)

router = APIRouter(prefix="/employees")

# Profile fields only HR may change, even on one's own profile.
HR_PROFILE_FIELDS = frozenset({"salary", "job_title"})


@router.get(
    "",
    response_model=SuccessResponse[PaginatedResponse],
    dependencies=[Depends(require_permission(Permission.EMPLOYEES_READ))],
)
def list_employees(
    service: EmployeeServiceDep,
    pagination: PaginationDep,
    search: Optional[str] = Query(None, max_length=100),
    department_id: Optional[str] = Query(None),
    status_: Optional[UserStatus] = Query(None, alias="status"),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc", pattern=r"^(asc|desc)$"),
):
    filters = EmployeeFilter(
        search=search,
        department_id=department_id,
        status=status_,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return SuccessResponse.create(service.list_employees(filters, pagination))


@router.post(
    "",
    response_model=SuccessResponse[EmployeeCreated],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.EMPLOYEES_CREATE))],
)
def create_employee(data: EmployeeCreate, service: EmployeeServiceDep):
    return SuccessResponse.create(service.create(data), "Employee created successfully")


@router.get("/{user_id}", response_model=SuccessResponse[EmployeeResponse])
def get_employee(user_id: str, principal: CurrentPrincipal, service: EmployeeServiceDep):
    require_owner_or_permission(principal, user_id, Permission.EMPLOYEES_READ)
    return SuccessResponse.create(service.get(user_id))


@router.put(
    "/{user_id}",
    response_model=SuccessResponse[EmployeeResponse],
    dependencies=[Depends(require_permission(Permission.EMPLOYEES_UPDATE))],
)
def update_employee(user_id: str, data: EmployeeUpdate, service: EmployeeServiceDep):
    return SuccessResponse.create(service.update(user_id, data), "Employee updated successfully")


@router.delete(
    "/{user_id}",
    response_model=SuccessResponse[EmployeeResponse],
    dependencies=[Depends(require_permission(Permission.EMPLOYEES_DELETE))],
)
def delete_employee(user_id: str, service: EmployeeServiceDep):
    """Soft delete: the account is deactivated, never removed."""
    return SuccessResponse.create(service.deactivate(user_id), "Employee deleted successfully")


@router.get("/{user_id}/profile", response_model=SuccessResponse[ProfileResponse])
def get_profile(user_id: str, principal: CurrentPrincipal, service: ProfileServiceDep):
    require_owner_or_permission(principal, user_id, Permission.EMPLOYEES_READ)
    return SuccessResponse.create(service.get_profile(user_id))


@router.put("/{user_id}/profile", response_model=SuccessResponse[ProfileResponse])
def update_profile(
    user_id: str,
    data: ProfileUpdate,
    principal: CurrentPrincipal,
    service: ProfileServiceDep,
):
    require_owner_or_permission(principal, user_id, Permission.EMPLOYEES_UPDATE)
    if not has_permission(principal, Permission.EMPLOYEES_UPDATE) and HR_PROFILE_FIELDS.intersection(data.changes()):
        raise PermissionDenied(
            "Salary and job title can only be changed by HR",
            user_id=principal.user_id,
            role=principal.role,
            required_permission=Permission.EMPLOYEES_UPDATE.value,
        )
    return SuccessResponse.create(service.update_profile(user_id, data), "Profile updated successfully")


@router.get("/{user_id}/stats", response_model=SuccessResponse[EmployeeStats])
def employee_stats(user_id: str, principal: CurrentPrincipal, service: EmployeeServiceDep):
    require_owner_or_permission(principal, user_id, Permission.EMPLOYEES_READ)
    return SuccessResponse.create(service.stats(user_id))
