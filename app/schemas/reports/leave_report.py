# --- File: app/schemas/reports/leave_report.py ---
from __future__ import annotations

from datetime import date as Date
from typing import Dict

from app.schemas.common.base import BaseSchema

__all__ = ["LeaveReport"]


class LeaveReport(BaseSchema):
    """Leave requests starting inside the window, grouped by status and type."""

    start_date: Date
    end_date: Date
    total_requests: int
    by_status: Dict[str, int]
    by_type: Dict[str, int]
    total_approved_days: int
