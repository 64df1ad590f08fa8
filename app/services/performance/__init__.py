"""
Performance service layer.
"""

from app.services.performance.performance_service import PerformanceService

__all__ = ["PerformanceService"]
