"""
Reporting service layer.
"""

from app.services.reports.report_service import ReportService

__all__ = ["ReportService"]
