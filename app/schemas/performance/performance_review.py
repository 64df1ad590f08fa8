# --- File: app/schemas/performance/performance_review.py ---
"""
Performance review schemas.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Annotated, Optional

from pydantic import Field, model_validator

from app.models.base.enums import ReviewStatus
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "Rating",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewFilter",
]

Rating = Annotated[int, Field(ge=1, le=5)]


class ReviewCreate(BaseCreateSchema):
    user_id: str = Field(..., description="Employee under review")
    review_period_start: Date
    review_period_end: Date
    overall_rating: Optional[Rating] = None
    goals_achievement: Optional[Rating] = None
    competency_rating: Optional[Rating] = None
    feedback: Optional[str] = Field(default=None, max_length=5000)
    improvement_areas: Optional[str] = Field(default=None, max_length=5000)
    status: ReviewStatus = ReviewStatus.DRAFT

    @model_validator(mode="after")
    def validate_period(self):
        if self.review_period_end < self.review_period_start:
            raise ValueError("review_period_end must be after or equal to review_period_start")
        return self


class ReviewUpdate(BaseUpdateSchema):
    review_period_start: Optional[Date] = None
    review_period_end: Optional[Date] = None
    overall_rating: Optional[Rating] = None
    goals_achievement: Optional[Rating] = None
    competency_rating: Optional[Rating] = None
    feedback: Optional[str] = Field(default=None, max_length=5000)
    improvement_areas: Optional[str] = Field(default=None, max_length=5000)
    status: Optional[ReviewStatus] = None


class ReviewResponse(BaseSchema):
    id: str
    user_id: str
    employee_name: Optional[str] = None
    reviewer_id: Optional[str] = None
    reviewer_name: Optional[str] = None
    review_period_start: Date
    review_period_end: Date
    overall_rating: Optional[int] = None
    goals_achievement: Optional[int] = None
    competency_rating: Optional[int] = None
    feedback: Optional[str] = None
    improvement_areas: Optional[str] = None
    status: ReviewStatus
    created_at: Optional[datetime] = None

    @classmethod
    def from_review(cls, review) -> "ReviewResponse":
        response = cls.model_validate(review)
        response.employee_name = review.employee.full_name if review.employee else None
        response.reviewer_name = review.reviewer.full_name if review.reviewer else None
        return response


class ReviewFilter(BaseFilterSchema):
    user_id: Optional[str] = None
    reviewer_id: Optional[str] = None
    status: Optional[ReviewStatus] = None
