"""
Performance models package.
"""

from app.models.performance.performance_review import Goal, PerformanceReview

__all__ = [
    "Goal",
    "PerformanceReview",
]
