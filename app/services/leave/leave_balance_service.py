"""
Leave balances per (user, leave type, year).
"""

from __future__ import annotations

from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.leave import LeaveBalance, LeaveType
from app.repositories.leave import LeaveBalanceRepository, LeaveTypeRepository
from app.repositories.user import UserRepository
from app.schemas.leave.leave_balance import LeaveBalanceAllocate, LeaveBalanceResponse
from app.services.common import errors
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


def get_or_allocate_balance(
    repo: LeaveBalanceRepository,
    leave_type: LeaveType,
    user_id: str,
    year: int,
) -> LeaveBalance:
    """
    Return the balance row, allocating the leave type's yearly days first
    when none exists yet.

    The insert runs in a savepoint. If a concurrent caller allocated the
    same row first, the savepoint is rolled back and that row is used.

    Raises:
        ConflictError: If the insert collided but no row can be read back
    """
    balance = repo.get(user_id, leave_type.id, year)
    if balance is not None:
        return balance

    allocated = float(leave_type.max_days_per_year)
    balance = LeaveBalance(
        user_id=user_id,
        leave_type_id=leave_type.id,
        year=year,
        allocated_days=allocated,
        used_days=0.0,
        remaining_days=allocated,
    )
    try:
        with repo.session.begin_nested():
            repo.add(balance)
    except IntegrityError:
        existing = repo.get(user_id, leave_type.id, year)
        if existing is None:
            raise errors.ConflictError("Leave balance changed concurrently, please retry")
        logger.info(
            "Leave balance allocated concurrently, using existing row",
            extra={"user_id": user_id, "leave_type": leave_type.name, "year": year},
        )
        return existing

    logger.info(
        "Leave balance allocated",
        extra={"user_id": user_id, "leave_type": leave_type.name, "year": year},
    )
    return balance


class LeaveBalanceService:
    """Balance listings and administrative allocation."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_repo(self, uow: UnitOfWork) -> LeaveBalanceRepository:
        return uow.get_repo(LeaveBalanceRepository)

    def list_balances(self, year: int, user_id: Optional[str] = None) -> List[LeaveBalanceResponse]:
        with UnitOfWork(self._session_factory) as uow:
            balances = self._get_repo(uow).list_for_year(year, user_id)
            return [LeaveBalanceResponse.from_balance(b) for b in balances]

    def allocate(self, data: LeaveBalanceAllocate) -> LeaveBalanceResponse:
        """
        Create or adjust a balance.

        Raises:
            NotFoundError: Unknown user or leave type
            ValidationError: Allocation below the days already used
        """
        with UnitOfWork(self._session_factory) as uow:
            if uow.get_repo(UserRepository).find_by_id(data.user_id) is None:
                raise errors.NotFoundError("User", data.user_id)
            if uow.get_repo(LeaveTypeRepository).find_by_id(data.leave_type_id) is None:
                raise errors.NotFoundError("Leave type", data.leave_type_id)

            repo = self._get_repo(uow)
            balance = repo.get(data.user_id, data.leave_type_id, data.year)

            if balance is None:
                balance = LeaveBalance(
                    user_id=data.user_id,
                    leave_type_id=data.leave_type_id,
                    year=data.year,
                    allocated_days=data.allocated_days,
                    used_days=0.0,
                    remaining_days=data.allocated_days,
                )
                try:
                    repo.add(balance)
                except IntegrityError as exc:
                    raise errors.ConflictError("Leave balance already exists") from exc
            else:
                if data.allocated_days < balance.used_days:
                    raise errors.ValidationError(
                        "Allocated days cannot be less than days already used",
                        field="allocated_days",
                    )
                repo.update(
                    balance,
                    {
                        "allocated_days": data.allocated_days,
                        "remaining_days": data.allocated_days - balance.used_days,
                    },
                )

            return LeaveBalanceResponse.from_balance(balance)
