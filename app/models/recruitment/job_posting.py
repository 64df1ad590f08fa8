"""
Recruitment models: job postings, candidates and the applications that
link them.
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import Date, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import ApplicationStatus, EmploymentType, JobPostingStatus
from app.models.base.mixins import utcnow

__all__ = ["Application", "Candidate", "JobPosting"]


class JobPosting(BaseModel):
    """
    Open position in a department.

    `posted_at` is stamped the first time the posting becomes ACTIVE.
    Deleting a posting deletes its applications.
    """

    __tablename__ = "job_postings"

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    department_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    salary_range: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    employment_type: Mapped[EmploymentType] = mapped_column(
        Enum(EmploymentType, name="employment_type_enum"),
        nullable=False,
        default=EmploymentType.FULL_TIME,
    )
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[JobPostingStatus] = mapped_column(
        Enum(JobPostingStatus, name="job_posting_status_enum"),
        nullable=False,
        default=JobPostingStatus.DRAFT,
        index=True,
    )
    posted_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    posted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    closing_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    department: Mapped["Department"] = relationship("Department", lazy="joined")
    applications: Mapped[List["Application"]] = relationship(
        "Application",
        back_populates="job_posting",
        cascade="all, delete-orphan",
    )


class Candidate(BaseModel):
    __tablename__ = "candidates"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    linkedin_profile: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    source: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Where the candidate came from (referral, job board, ...)",
    )

    applications: Mapped[List["Application"]] = relationship(
        "Application",
        back_populates="candidate",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Application(BaseModel):
    """A candidate applies to a given posting at most once."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_posting_id", name="uq_application_candidate_job"),
    )

    candidate_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    job_posting_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("job_postings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, name="application_status_enum"),
        nullable=False,
        default=ApplicationStatus.APPLIED,
        index=True,
    )
    application_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    cover_letter: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    candidate: Mapped[Candidate] = relationship(
        "Candidate",
        back_populates="applications",
        lazy="joined",
    )
    job_posting: Mapped[JobPosting] = relationship(
        "JobPosting",
        back_populates="applications",
        lazy="joined",
    )
