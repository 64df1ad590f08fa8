"""
Recruitment schemas package.
"""

from app.schemas.recruitment.analytics import RecruitmentMetrics, RecruitmentPipeline
from app.schemas.recruitment.application import (
    ApplicationCreate,
    ApplicationFilter,
    ApplicationResponse,
    ApplicationUpdate,
)
from app.schemas.recruitment.candidate import CandidateCreate, CandidateResponse, CandidateUpdate
from app.schemas.recruitment.job_posting import (
    JobPostingCreate,
    JobPostingFilter,
    JobPostingResponse,
    JobPostingUpdate,
)

__all__ = [
    "ApplicationCreate",
    "ApplicationFilter",
    "ApplicationResponse",
    "ApplicationUpdate",
    "CandidateCreate",
    "CandidateResponse",
    "CandidateUpdate",
    "JobPostingCreate",
    "JobPostingFilter",
    "JobPostingResponse",
    "JobPostingUpdate",
    "RecruitmentMetrics",
    "RecruitmentPipeline",
]
