"""
Database enums shared by models and schemas.
"""

import enum


class UserStatus(str, enum.Enum):
    """User lifecycle status."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class AttendanceStatus(str, enum.Enum):
    """Daily attendance status."""
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"


class LeaveStatus(str, enum.Enum):
    """Leave request lifecycle status."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


class ReviewStatus(str, enum.Enum):
    """Performance review status."""
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    COMPLETED = "COMPLETED"


class GoalStatus(str, enum.Enum):
    """Goal progress status."""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class EmploymentType(str, enum.Enum):
    """Contract type offered by a job posting."""
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"


class JobPostingStatus(str, enum.Enum):
    """Job posting visibility."""
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    CLOSED = "CLOSED"


class ApplicationStatus(str, enum.Enum):
    """Stage of a candidate's application in the hiring pipeline."""
    APPLIED = "APPLIED"
    SCREENING = "SCREENING"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    HIRED = "HIRED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"
