# app/services/common/errors.py
"""
Service-layer exceptions.

These exceptions are raised by service methods and should be caught
at the API layer to return appropriate HTTP responses.
"""
from __future__ import annotations

from typing import Any, Optional
from uuid import UUID


class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ServiceError):
    """Raised when a requested resource does not exist."""

    def __init__(
        self,
        resource_type: str,
        identifier: UUID | str | int,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} not found"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class ValidationError(ServiceError):
    """Raised when business logic validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class AuthenticationError(ServiceError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class InvalidCredentials(AuthenticationError):
    """Unknown email or wrong password. Both cases share one message."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class AccountNotActive(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Account is not active. Please contact administrator.")


class InvalidToken(AuthenticationError):
    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when a user lacks permission for an action."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        required_permission: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.required_permission = required_permission


class ConflictError(ServiceError):
    """Raised when an operation conflicts with current state."""

    def __init__(
        self,
        message: str,
        conflicting_field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.conflicting_field = conflicting_field


class DuplicateIdentity(ConflictError):
    def __init__(self) -> None:
        super().__init__("User with this email or employee ID already exists")


class AlreadyClockedIn(ConflictError):
    def __init__(self) -> None:
        super().__init__("Already clocked in today")


class NoClockInRecord(ConflictError):
    def __init__(self) -> None:
        super().__init__("No clock-in record found for today")


class AlreadyClockedOut(ConflictError):
    def __init__(self) -> None:
        super().__init__("Already clocked out today")


class BreakStateError(ConflictError):
    """Break started twice, or ended without being started."""


class InvalidLeaveTransition(ConflictError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move leave request from {current} to {target}",
            details={"current_status": current, "target_status": target},
        )
        self.current = current
        self.target = target


class InsufficientBalance(ConflictError):
    def __init__(self, remaining: float, requested: int) -> None:
        super().__init__(
            "Insufficient leave balance",
            details={"remaining_days": remaining, "days_requested": requested},
        )
        self.remaining = remaining
        self.requested = requested


class DuplicateCandidate(ConflictError):
    def __init__(self) -> None:
        super().__init__("Candidate with this email already exists", conflicting_field="email")


class DuplicateApplication(ConflictError):
    def __init__(self) -> None:
        super().__init__("Candidate has already applied to this job posting")


class JobPostingNotOpen(ConflictError):
    def __init__(self, status: str) -> None:
        super().__init__(
            "Job posting is not accepting applications",
            details={"status": status},
        )


class InternalError(ServiceError):
    """Unexpected failure in a collaborator; never leaks details to callers."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
