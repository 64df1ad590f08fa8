"""
Performance review and goal schemas package.
"""

from app.schemas.performance.goal import GoalCreate, GoalFilter, GoalResponse, GoalUpdate
from app.schemas.performance.overview import PerformanceOverview
from app.schemas.performance.performance_review import (
    ReviewCreate,
    ReviewFilter,
    ReviewResponse,
    ReviewUpdate,
)

__all__ = [
    "GoalCreate",
    "GoalFilter",
    "GoalResponse",
    "GoalUpdate",
    "PerformanceOverview",
    "ReviewCreate",
    "ReviewFilter",
    "ReviewResponse",
    "ReviewUpdate",
]
