# --- File: app/schemas/reports/headcount_report.py ---
from __future__ import annotations

from typing import Dict

from app.schemas.common.base import BaseSchema

__all__ = ["HeadcountReport"]


class HeadcountReport(BaseSchema):
    total_employees: int
    by_department: Dict[str, int]
    by_status: Dict[str, int]
