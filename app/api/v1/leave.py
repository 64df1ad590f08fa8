"""
Leave endpoints: requests and their approval workflow, balances and the
leave type catalog.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.api.deps import (
    CurrentPrincipal,
    LeaveBalanceServiceDep,
    LeaveRequestServiceDep,
    LeaveTypeServiceDep,
    PaginationDep,
    SettingsDep,
    require_permission,
    require_role,
)
from app.models.base.enums import LeaveStatus
from app.schemas.common.pagination import PaginatedResponse
from app.schemas.common.response import SuccessResponse
from app.schemas.leave import (
    LeaveApproveRequest,
    LeaveBalanceAllocate,
    LeaveBalanceResponse,
    LeaveRejectRequest,
    LeaveRequestCreate,
    LeaveRequestFilter,
    LeaveRequestResponse,
    LeaveRequestUpdate,
    LeaveTypeCreate,
    LeaveTypeResponse,
    LeaveTypeUpdate,
)
from app.services.common.permissions import (
    Permission,
    Principal,
    RoleName,
    require_owner_or_permission,
    visible_user_id,
)

router = APIRouter(prefix="/leave")

LEAVE_ADMINS = (RoleName.ADMINISTRATOR, RoleName.HR_MANAGER)


def _year_or_current(year: Optional[int], settings) -> int:
    return year or datetime.now(settings.tzinfo).year


# ==================== Requests ====================

@router.get("/requests", response_model=SuccessResponse[PaginatedResponse])
def list_requests(
    principal: CurrentPrincipal,
    service: LeaveRequestServiceDep,
    pagination: PaginationDep,
    status_: Optional[LeaveStatus] = Query(None, alias="status"),
    user_id: Optional[str] = Query(None),
    leave_type_id: Optional[str] = Query(None),
):
    filters = LeaveRequestFilter(
        status=status_,
        user_id=visible_user_id(principal, user_id, Permission.LEAVE_APPROVE),
        leave_type_id=leave_type_id,
    )
    return SuccessResponse.create(service.list_requests(filters, pagination))


@router.post(
    "/requests",
    response_model=SuccessResponse[LeaveRequestResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_request(
    data: LeaveRequestCreate,
    principal: CurrentPrincipal,
    service: LeaveRequestServiceDep,
):
    request = service.create(principal.user_id, data)
    return SuccessResponse.create(request, "Leave request created successfully")


@router.get("/requests/{request_id}", response_model=SuccessResponse[LeaveRequestResponse])
def get_request(request_id: str, principal: CurrentPrincipal, service: LeaveRequestServiceDep):
    return SuccessResponse.create(service.get(principal, request_id))


@router.put("/requests/{request_id}", response_model=SuccessResponse[LeaveRequestResponse])
def update_request(
    request_id: str,
    data: LeaveRequestUpdate,
    principal: CurrentPrincipal,
    service: LeaveRequestServiceDep,
):
    request = service.update(principal, request_id, data)
    return SuccessResponse.create(request, "Leave request updated successfully")


@router.delete(
    "/requests/{request_id}",
    response_model=SuccessResponse[None],
    dependencies=[Depends(require_role(*LEAVE_ADMINS))],
)
def delete_request(request_id: str, service: LeaveRequestServiceDep):
    service.delete(request_id)
    return SuccessResponse.create(message="Leave request deleted successfully")


@router.put("/requests/{request_id}/approve", response_model=SuccessResponse[LeaveRequestResponse])
def approve_request(
    request_id: str,
    service: LeaveRequestServiceDep,
    principal: Principal = Depends(require_permission(Permission.LEAVE_APPROVE)),
    data: Optional[LeaveApproveRequest] = Body(default=None),
):
    comments = data.comments if data else None
    request = service.approve(request_id, principal.user_id, comments)
    return SuccessResponse.create(request, "Leave request approved successfully")


@router.put("/requests/{request_id}/reject", response_model=SuccessResponse[LeaveRequestResponse])
def reject_request(
    request_id: str,
    service: LeaveRequestServiceDep,
    principal: Principal = Depends(require_permission(Permission.LEAVE_APPROVE)),
    data: Optional[LeaveRejectRequest] = Body(default=None),
):
    comments = data.comments if data else None
    request = service.reject(request_id, principal.user_id, comments)
    return SuccessResponse.create(request, "Leave request rejected")


@router.put("/requests/{request_id}/cancel", response_model=SuccessResponse[LeaveRequestResponse])
def cancel_request(request_id: str, principal: CurrentPrincipal, service: LeaveRequestServiceDep):
    request = service.cancel(principal, request_id)
    return SuccessResponse.create(request, "Leave request cancelled successfully")


# ==================== Balances ====================

@router.get(
    "/balances",
    response_model=SuccessResponse[List[LeaveBalanceResponse]],
    dependencies=[Depends(require_permission(Permission.LEAVE_APPROVE))],
)
def list_balances(
    service: LeaveBalanceServiceDep,
    settings: SettingsDep,
    year: Optional[int] = Query(None, ge=2000, le=2100),
):
    return SuccessResponse.create(service.list_balances(_year_or_current(year, settings)))


@router.get("/balances/user/{user_id}", response_model=SuccessResponse[List[LeaveBalanceResponse]])
def user_balances(
    user_id: str,
    principal: CurrentPrincipal,
    service: LeaveBalanceServiceDep,
    settings: SettingsDep,
    year: Optional[int] = Query(None, ge=2000, le=2100),
):
    require_owner_or_permission(principal, user_id, Permission.LEAVE_APPROVE)
    return SuccessResponse.create(service.list_balances(_year_or_current(year, settings), user_id))


@router.post(
    "/balances",
    response_model=SuccessResponse[LeaveBalanceResponse],
    dependencies=[Depends(require_permission(Permission.LEAVE_APPROVE))],
)
def allocate_balance(data: LeaveBalanceAllocate, service: LeaveBalanceServiceDep):
    return SuccessResponse.create(service.allocate(data), "Leave balance saved successfully")


# ==================== Types ====================

@router.get("/types", response_model=SuccessResponse[List[LeaveTypeResponse]])
def list_types(
    principal: CurrentPrincipal,
    service: LeaveTypeServiceDep,
    active_only: bool = Query(True),
):
    return SuccessResponse.create(service.list_types(active_only))


@router.post(
    "/types",
    response_model=SuccessResponse[LeaveTypeResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*LEAVE_ADMINS))],
)
def create_type(data: LeaveTypeCreate, service: LeaveTypeServiceDep):
    return SuccessResponse.create(service.create(data), "Leave type created successfully")


@router.put(
    "/types/{leave_type_id}",
    response_model=SuccessResponse[LeaveTypeResponse],
    dependencies=[Depends(require_role(*LEAVE_ADMINS))],
)
def update_type(leave_type_id: str, data: LeaveTypeUpdate, service: LeaveTypeServiceDep):
    return SuccessResponse.create(service.update(leave_type_id, data), "Leave type updated successfully")
