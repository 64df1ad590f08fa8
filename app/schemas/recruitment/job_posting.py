"""
Job posting schemas.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Optional

from pydantic import Field

from app.models.base.enums import EmploymentType, JobPostingStatus
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "JobPostingCreate",
    "JobPostingUpdate",
    "JobPostingResponse",
    "JobPostingFilter",
]


class JobPostingCreate(BaseCreateSchema):
    title: str = Field(..., min_length=5, max_length=255)
    department_id: str
    description: str = Field(..., min_length=50, max_length=10000)
    requirements: Optional[str] = Field(default=None, max_length=5000)
    salary_range: Optional[str] = Field(default=None, max_length=100)
    employment_type: EmploymentType
    location: Optional[str] = Field(default=None, max_length=255)
    status: JobPostingStatus = JobPostingStatus.DRAFT
    closing_date: Optional[Date] = None


class JobPostingUpdate(BaseUpdateSchema):
    title: Optional[str] = Field(default=None, min_length=5, max_length=255)
    department_id: Optional[str] = None
    description: Optional[str] = Field(default=None, min_length=50, max_length=10000)
    requirements: Optional[str] = Field(default=None, max_length=5000)
    salary_range: Optional[str] = Field(default=None, max_length=100)
    employment_type: Optional[EmploymentType] = None
    location: Optional[str] = Field(default=None, max_length=255)
    status: Optional[JobPostingStatus] = None
    closing_date: Optional[Date] = None


class JobPostingResponse(BaseSchema):
    id: str
    title: str
    department_id: str
    department_name: Optional[str] = None
    description: str
    requirements: Optional[str] = None
    salary_range: Optional[str] = None
    employment_type: EmploymentType
    location: Optional[str] = None
    status: JobPostingStatus
    posted_by: Optional[str] = None
    posted_at: Optional[datetime] = None
    closing_date: Optional[Date] = None
    application_count: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_posting(cls, posting) -> "JobPostingResponse":
        response = cls.model_validate(posting)
        response.department_name = posting.department.name if posting.department else None
        response.application_count = len(posting.applications)
        return response


class JobPostingFilter(BaseFilterSchema):
    status: Optional[JobPostingStatus] = None
    department_id: Optional[str] = None
