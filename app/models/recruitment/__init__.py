"""
Recruitment models package.
"""

from app.models.recruitment.job_posting import Application, Candidate, JobPosting

__all__ = [
    "Application",
    "Candidate",
    "JobPosting",
]
