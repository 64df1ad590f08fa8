"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the HR management system
"""
from fastapi import APIRouter

from app.api.v1 import attendance, auth, employees, leave, performance, recruitment, reports
from app.config.settings import settings

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(auth.router, tags=["Authentication"])
router.include_router(attendance.router, tags=["Attendance Management"])
router.include_router(leave.router, tags=["Leave Management"])
router.include_router(employees.router, tags=["Employee Management"])
router.include_router(performance.router, tags=["Performance Management"])
router.include_router(recruitment.router, tags=["Recruitment"])
router.include_router(reports.router, tags=["Reports"])


@router.get("/health", tags=["System Health"])
async def api_health_check():
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "api_version": "v1",
    }
