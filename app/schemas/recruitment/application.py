"""
Job application schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.base.enums import ApplicationStatus
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "ApplicationCreate",
    "ApplicationUpdate",
    "ApplicationResponse",
    "ApplicationFilter",
]


class ApplicationCreate(BaseCreateSchema):
    candidate_id: str
    job_posting_id: str
    cover_letter: Optional[str] = Field(default=None, max_length=10000)
    notes: Optional[str] = Field(default=None, max_length=5000)


class ApplicationUpdate(BaseUpdateSchema):
    """Moves an application through the pipeline; the pairing is fixed."""

    status: Optional[ApplicationStatus] = None
    notes: Optional[str] = Field(default=None, max_length=5000)


class ApplicationResponse(BaseSchema):
    id: str
    candidate_id: str
    candidate_name: Optional[str] = None
    job_posting_id: str
    job_title: Optional[str] = None
    status: ApplicationStatus
    application_date: datetime
    cover_letter: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_application(cls, application) -> "ApplicationResponse":
        response = cls.model_validate(application)
        response.candidate_name = application.candidate.full_name if application.candidate else None
        response.job_title = application.job_posting.title if application.job_posting else None
        return response


class ApplicationFilter(BaseFilterSchema):
    status: Optional[ApplicationStatus] = None
    job_posting_id: Optional[str] = None
    candidate_id: Optional[str] = None
