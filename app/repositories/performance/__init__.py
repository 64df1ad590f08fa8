"""
Performance repositories.
"""
from app.repositories.performance.performance_repository import (
    GoalRepository,
    PerformanceReviewRepository,
)

__all__ = [
    "GoalRepository",
    "PerformanceReviewRepository",
]
