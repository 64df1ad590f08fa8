"""
Time tracking entries: free-form project/task time owned by a user.
"""

from __future__ import annotations

from datetime import date, timezone
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.attendance import TimeTracking
from app.models.base.mixins import ensure_utc
from app.repositories.attendance import TimeTrackingRepository
from app.schemas.attendance.time_tracking import (
    TimeEntryCreate,
    TimeEntryResponse,
    TimeEntryUpdate,
)
from app.services.common import errors
from app.services.common.permissions import (
    Permission,
    Principal,
    require_owner_or_permission,
)
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


def _utc(value):
    return ensure_utc(value).astimezone(timezone.utc) if value is not None else None


class TimeTrackingService:
    """
    CRUD for time entries.

    Only the owner or a holder of `attendance.manage` may change an entry.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_repo(self, uow: UnitOfWork) -> TimeTrackingRepository:
        return uow.get_repo(TimeTrackingRepository)

    def _get_owned(self, repo: TimeTrackingRepository, principal: Principal, entry_id: str) -> TimeTracking:
        entry = repo.find_by_id(entry_id)
        if entry is None:
            raise errors.NotFoundError("Time entry", entry_id)
        require_owner_or_permission(principal, entry.user_id, Permission.ATTENDANCE_MANAGE)
        return entry

    def create(self, user_id: str, data: TimeEntryCreate) -> TimeEntryResponse:
        with UnitOfWork(self._session_factory) as uow:
            entry = TimeTracking(
                user_id=user_id,
                project_name=data.project_name,
                task_description=data.task_description,
                start_time=_utc(data.start_time),
                end_time=_utc(data.end_time),
                billable=data.billable,
            )
            self._get_repo(uow).add(entry)
            return TimeEntryResponse.model_validate(entry)

    def list_for_user(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[TimeEntryResponse]:
        with UnitOfWork(self._session_factory) as uow:
            entries = self._get_repo(uow).find_for_user(user_id, start_date, end_date)
            return [TimeEntryResponse.model_validate(e) for e in entries]

    def update(
        self,
        principal: Principal,
        entry_id: str,
        data: TimeEntryUpdate,
    ) -> TimeEntryResponse:
        """
        Raises:
            ValidationError: If the merged entry would end before it starts
        """
        changes = data.changes()
        for key in ("start_time", "end_time"):
            if key in changes:
                changes[key] = _utc(changes[key])

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            entry = self._get_owned(repo, principal, entry_id)

            start = changes.get("start_time", ensure_utc(entry.start_time))
            end = changes.get("end_time", ensure_utc(entry.end_time))
            if start is None:
                raise errors.ValidationError("start_time cannot be cleared", field="start_time")
            if end is not None and end < start:
                raise errors.ValidationError(
                    "end_time must be after or equal to start_time",
                    field="end_time",
                )

            repo.update(entry, changes)
            return TimeEntryResponse.model_validate(entry)

    def delete(self, principal: Principal, entry_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            repo.delete(self._get_owned(repo, principal, entry_id))

        logger.info("Time entry deleted", extra={"entry_id": entry_id})
