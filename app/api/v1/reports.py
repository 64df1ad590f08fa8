"""
Read-only reports. Every endpoint requires reports.read.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import ReportServiceDep, require_permission
from app.schemas.common.response import SuccessResponse
from app.schemas.reports import (
    AttendanceReport,
    DashboardCharts,
    DashboardStats,
    HeadcountReport,
    LeaveReport,
    PerformanceReport,
    ReportPeriod,
)
from app.services.common.permissions import Permission

router = APIRouter(
    prefix="/reports",
    dependencies=[Depends(require_permission(Permission.REPORTS_READ))],
)


def get_report_period(
    start_date: date = Query(..., description="First day of the period (inclusive)"),
    end_date: date = Query(..., description="Last day of the period (inclusive)"),
    department_id: Optional[str] = Query(None),
) -> ReportPeriod:
    return ReportPeriod(start_date=start_date, end_date=end_date, department_id=department_id)


@router.get("/attendance", response_model=SuccessResponse[AttendanceReport])
def attendance_report(service: ReportServiceDep, period: ReportPeriod = Depends(get_report_period)):
    return SuccessResponse.create(service.attendance_report(period))


@router.get("/leave", response_model=SuccessResponse[LeaveReport])
def leave_report(service: ReportServiceDep, period: ReportPeriod = Depends(get_report_period)):
    return SuccessResponse.create(service.leave_report(period))


@router.get("/performance", response_model=SuccessResponse[PerformanceReport])
def performance_report(service: ReportServiceDep, period: ReportPeriod = Depends(get_report_period)):
    return SuccessResponse.create(service.performance_report(period))


@router.get("/headcount", response_model=SuccessResponse[HeadcountReport])
def headcount_report(service: ReportServiceDep):
    return SuccessResponse.create(service.headcount())


@router.get("/dashboard/stats", response_model=SuccessResponse[DashboardStats])
def dashboard_stats(service: ReportServiceDep):
    return SuccessResponse.create(service.dashboard_stats())


@router.get("/dashboard/charts", response_model=SuccessResponse[DashboardCharts])
def dashboard_charts(service: ReportServiceDep):
    return SuccessResponse.create(service.dashboard_charts())
