"""
Candidate schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, HttpUrl, field_validator

from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "CandidateCreate",
    "CandidateUpdate",
    "CandidateResponse",
]


class CandidateCreate(BaseCreateSchema):
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=30)
    linkedin_profile: Optional[HttpUrl] = None
    source: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    def to_columns(self) -> dict:
        values = self.model_dump()
        if self.linkedin_profile is not None:
            values["linkedin_profile"] = str(self.linkedin_profile)
        return values


class CandidateUpdate(BaseUpdateSchema):
    first_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    linkedin_profile: Optional[HttpUrl] = None
    source: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    def changes(self) -> dict:
        values = super().changes()
        if values.get("linkedin_profile") is not None:
            values["linkedin_profile"] = str(self.linkedin_profile)
        return values


class CandidateResponse(BaseSchema):
    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: Optional[str] = None
    linkedin_profile: Optional[str] = None
    source: Optional[str] = None
    application_count: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_candidate(cls, candidate) -> "CandidateResponse":
        response = cls.model_validate(candidate)
        response.application_count = len(candidate.applications)
        return response
