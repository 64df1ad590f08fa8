"""
Recruitment service layer.
"""

from app.services.recruitment.recruitment_service import RecruitmentService

__all__ = ["RecruitmentService"]
