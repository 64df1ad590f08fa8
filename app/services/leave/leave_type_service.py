"""
Leave type configuration.
"""

from __future__ import annotations

from typing import Callable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.leave import LeaveType
from app.repositories.leave import LeaveTypeRepository
from app.schemas.leave.leave_type import LeaveTypeCreate, LeaveTypeResponse, LeaveTypeUpdate
from app.services.common import errors
from app.services.common.unit_of_work import UnitOfWork


class LeaveTypeService:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_repo(self, uow: UnitOfWork) -> LeaveTypeRepository:
        return uow.get_repo(LeaveTypeRepository)

    def list_types(self, active_only: bool = False) -> List[LeaveTypeResponse]:
        with UnitOfWork(self._session_factory) as uow:
            return [
                LeaveTypeResponse.model_validate(t)
                for t in self._get_repo(uow).list_types(active_only=active_only)
            ]

    def create(self, data: LeaveTypeCreate) -> LeaveTypeResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            if repo.get_by_name(data.name):
                raise errors.ConflictError(
                    "Leave type with this name already exists",
                    conflicting_field="name",
                )
            leave_type = LeaveType(**data.model_dump(), is_active=True)
            try:
                repo.add(leave_type)
            except IntegrityError as exc:
                raise errors.ConflictError(
                    "Leave type with this name already exists",
                    conflicting_field="name",
                ) from exc
            return LeaveTypeResponse.model_validate(leave_type)

    def update(self, leave_type_id: str, data: LeaveTypeUpdate) -> LeaveTypeResponse:
        changes = data.changes()
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            leave_type = repo.find_by_id(leave_type_id)
            if leave_type is None:
                raise errors.NotFoundError("Leave type", leave_type_id)

            new_name = changes.get("name")
            if new_name and new_name.lower() != leave_type.name.lower():
                existing = repo.get_by_name(new_name)
                if existing is not None:
                    raise errors.ConflictError(
                        "Leave type with this name already exists",
                        conflicting_field="name",
                    )

            repo.update(leave_type, changes)
            return LeaveTypeResponse.model_validate(leave_type)
