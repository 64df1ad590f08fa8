"""
Attendance endpoints: the clock state machine, attendance queries and
time tracking entries.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Body, Query, status

from app.api.deps import (
    AttendanceServiceDep,
    CurrentPrincipal,
    PaginationDep,
    TimeTrackingServiceDep,
)
from app.models.base.enums import AttendanceStatus
from app.schemas.attendance import (
    AttendanceDayStatus,
    AttendanceFilter,
    AttendanceResponse,
    AttendanceSummary,
    ClockInRequest,
    TimeEntryCreate,
    TimeEntryResponse,
    TimeEntryUpdate,
)
from app.schemas.common.pagination import PaginatedResponse
from app.schemas.common.response import SuccessResponse
from app.services.common.permissions import (
    Permission,
    has_permission,
    require_owner_or_permission,
    visible_user_id,
)

router = APIRouter(prefix="/attendance")

# Holders of either may see other users' attendance.
ATTENDANCE_VIEWERS = (Permission.ATTENDANCE_MANAGE, Permission.EMPLOYEES_READ)


# ==================== Clock state machine ====================

@router.post("/clock-in", response_model=SuccessResponse[AttendanceResponse])
def clock_in(
    principal: CurrentPrincipal,
    service: AttendanceServiceDep,
    data: Optional[ClockInRequest] = Body(default=None),
):
    record = service.clock_in(principal.user_id, data)
    return SuccessResponse.create(record, "Clocked in successfully")


@router.post("/clock-out", response_model=SuccessResponse[AttendanceResponse])
def clock_out(principal: CurrentPrincipal, service: AttendanceServiceDep):
    return SuccessResponse.create(service.clock_out(principal.user_id), "Clocked out successfully")


@router.post("/break-start", response_model=SuccessResponse[AttendanceResponse])
def break_start(principal: CurrentPrincipal, service: AttendanceServiceDep):
    return SuccessResponse.create(service.start_break(principal.user_id), "Break started")


@router.post("/break-end", response_model=SuccessResponse[AttendanceResponse])
def break_end(principal: CurrentPrincipal, service: AttendanceServiceDep):
    return SuccessResponse.create(service.end_break(principal.user_id), "Break ended")


# ==================== Queries ====================

@router.get("", response_model=SuccessResponse[PaginatedResponse])
def list_attendance(
    principal: CurrentPrincipal,
    service: AttendanceServiceDep,
    pagination: PaginationDep,
    user_id: Optional[str] = Query(None),
    status_: Optional[AttendanceStatus] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    filters = AttendanceFilter(
        user_id=visible_user_id(principal, user_id, *ATTENDANCE_VIEWERS),
        status=status_,
        start_date=start_date,
        end_date=end_date,
    )
    return SuccessResponse.create(service.list_records(filters, pagination))


@router.get("/today", response_model=SuccessResponse[List[AttendanceResponse]])
def today(principal: CurrentPrincipal, service: AttendanceServiceDep):
    """Everyone's records for today for viewers, the caller's own otherwise."""
    if any(has_permission(principal, p) for p in ATTENDANCE_VIEWERS):
        records = service.records_for_day()
    else:
        records = service.records_for_day(user_id=principal.user_id)
    return SuccessResponse.create(records)


@router.get("/status", response_model=SuccessResponse[AttendanceDayStatus])
def day_status(principal: CurrentPrincipal, service: AttendanceServiceDep):
    return SuccessResponse.create(service.status(principal.user_id))


@router.get("/user/{user_id}", response_model=SuccessResponse[List[AttendanceResponse]])
def user_attendance(
    user_id: str,
    principal: CurrentPrincipal,
    service: AttendanceServiceDep,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    require_owner_or_permission(principal, user_id, *ATTENDANCE_VIEWERS)
    return SuccessResponse.create(service.user_records(user_id, start_date, end_date))


@router.get("/user/{user_id}/summary", response_model=SuccessResponse[AttendanceSummary])
def user_summary(
    user_id: str,
    principal: CurrentPrincipal,
    service: AttendanceServiceDep,
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
):
    require_owner_or_permission(principal, user_id, *ATTENDANCE_VIEWERS)
    return SuccessResponse.create(service.monthly_summary(user_id, year, month))


# ==================== Time tracking ====================

@router.post(
    "/time-tracking",
    response_model=SuccessResponse[TimeEntryResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_time_entry(
    data: TimeEntryCreate,
    principal: CurrentPrincipal,
    service: TimeTrackingServiceDep,
):
    entry = service.create(principal.user_id, data)
    return SuccessResponse.create(entry, "Time entry created successfully")


@router.get("/time-tracking", response_model=SuccessResponse[List[TimeEntryResponse]])
def list_time_entries(
    principal: CurrentPrincipal,
    service: TimeTrackingServiceDep,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    return SuccessResponse.create(service.list_for_user(principal.user_id, start_date, end_date))


@router.put("/time-tracking/{entry_id}", response_model=SuccessResponse[TimeEntryResponse])
def update_time_entry(
    entry_id: str,
    data: TimeEntryUpdate,
    principal: CurrentPrincipal,
    service: TimeTrackingServiceDep,
):
    entry = service.update(principal, entry_id, data)
    return SuccessResponse.create(entry, "Time entry updated successfully")


@router.delete("/time-tracking/{entry_id}", response_model=SuccessResponse[None])
def delete_time_entry(
    entry_id: str,
    principal: CurrentPrincipal,
    service: TimeTrackingServiceDep,
):
    service.delete(principal, entry_id)
    return SuccessResponse.create(message="Time entry deleted successfully")
