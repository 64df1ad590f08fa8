"""
Recruitment repositories.
"""
from app.repositories.recruitment.recruitment_repository import (
    ApplicationRepository,
    CandidateRepository,
    JobPostingRepository,
)

__all__ = [
    "ApplicationRepository",
    "CandidateRepository",
    "JobPostingRepository",
]
