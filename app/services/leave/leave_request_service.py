"""
Leave request lifecycle and the balance ledger.

PENDING -> APPROVED | REJECTED | CANCELLED; the three outcomes are
terminal. Approval draws the requested days from the balance of the
start date's year in the same transaction that flips the status, using
compare-and-set updates so concurrent approvals cannot overdraw.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base.enums import LeaveStatus
from app.models.leave import LeaveRequest
from app.repositories.leave import (
    LeaveBalanceRepository,
    LeaveRequestRepository,
    LeaveTypeRepository,
)
from app.schemas.common.pagination import PaginatedResponse, PaginationParams
from app.schemas.leave.leave_application import (
    LeaveRequestCreate,
    LeaveRequestFilter,
    LeaveRequestResponse,
    LeaveRequestUpdate,
    inclusive_days,
)
from app.services.common import errors
from app.services.common.pagination import paginate
from app.services.common.permissions import (
    Permission,
    PermissionDenied,
    Principal,
    require_owner_or_permission,
)
from app.services.common.unit_of_work import UnitOfWork
from app.services.leave.leave_balance_service import get_or_allocate_balance

logger = get_logger(__name__)


class LeaveRequestService:
    """
    Leave requests.

    With `enforce_balance` off, approval only records the decision and
    balances are left untouched.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        enforce_balance: bool = True,
    ) -> None:
        self._session_factory = session_factory
        self._enforce_balance = enforce_balance

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_repo(self, uow: UnitOfWork) -> LeaveRequestRepository:
        return uow.get_repo(LeaveRequestRepository)

    def _get_request(self, repo: LeaveRequestRepository, request_id: str) -> LeaveRequest:
        request = repo.find_by_id(request_id)
        if request is None:
            raise errors.NotFoundError("Leave request", request_id)
        return request

    def _get_active_type(self, uow: UnitOfWork, leave_type_id: str):
        leave_type = uow.get_repo(LeaveTypeRepository).find_by_id(leave_type_id)
        if leave_type is None or not leave_type.is_active:
            raise errors.NotFoundError("Leave type", leave_type_id)
        return leave_type

    def _transition(
        self,
        repo: LeaveRequestRepository,
        request: LeaveRequest,
        target: LeaveStatus,
        values: Optional[dict] = None,
    ) -> None:
        """Compare-and-set out of PENDING; a lost race reports the state that won."""
        if request.status != LeaveStatus.PENDING:
            raise errors.InvalidLeaveTransition(request.status.value, target.value)
        if not repo.transition_if_pending(request, target, values):
            raise errors.InvalidLeaveTransition(request.status.value, target.value)

    # ------------------------------------------------------------------ #
    # Submission and edits
    # ------------------------------------------------------------------ #
    def create(self, user_id: str, data: LeaveRequestCreate) -> LeaveRequestResponse:
        """
        Submit a request. Balance is not checked here; approval enforces it.

        Raises:
            NotFoundError: Unknown or inactive leave type
        """
        with UnitOfWork(self._session_factory) as uow:
            self._get_active_type(uow, data.leave_type_id)

            request = LeaveRequest(
                user_id=user_id,
                leave_type_id=data.leave_type_id,
                start_date=data.start_date,
                end_date=data.end_date,
                days_requested=data.days_requested,
                reason=data.reason,
                status=LeaveStatus.PENDING,
            )
            self._get_repo(uow).add(request)
            response = LeaveRequestResponse.from_request(request)

        logger.info(
            "Leave request submitted",
            extra={"user_id": user_id, "days": response.days_requested},
        )
        return response

    def get(self, principal: Principal, request_id: str) -> LeaveRequestResponse:
        with UnitOfWork(self._session_factory) as uow:
            request = self._get_request(self._get_repo(uow), request_id)
            require_owner_or_permission(principal, request.user_id, Permission.LEAVE_APPROVE)
            return LeaveRequestResponse.from_request(request)

    def list_requests(
        self,
        filters: LeaveRequestFilter,
        params: PaginationParams,
    ) -> PaginatedResponse[LeaveRequestResponse]:
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            items, total = repo.paginate(repo.filtered_stmt(filters), params.offset, params.limit)
            return paginate(
                items=items,
                total_items=total,
                params=params,
                mapper=LeaveRequestResponse.from_request,
            )

    def update(
        self,
        principal: Principal,
        request_id: str,
        data: LeaveRequestUpdate,
    ) -> LeaveRequestResponse:
        """
        Edit a still-pending request; the day count is recomputed.

        Raises:
            InvalidLeaveTransition: If the request is no longer pending
            ValidationError: If the merged dates are out of order
        """
        changes = data.changes()
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            request = self._get_request(repo, request_id)
            require_owner_or_permission(principal, request.user_id, Permission.LEAVE_APPROVE)

            if request.status != LeaveStatus.PENDING:
                raise errors.InvalidLeaveTransition(request.status.value, LeaveStatus.PENDING.value)

            if "leave_type_id" in changes:
                self._get_active_type(uow, changes["leave_type_id"])

            start = changes.get("start_date") or request.start_date
            end = changes.get("end_date") or request.end_date
            if end < start:
                raise errors.ValidationError(
                    "end_date must be after or equal to start_date",
                    field="end_date",
                )
            changes["days_requested"] = inclusive_days(start, end)

            repo.update(request, changes)
            return LeaveRequestResponse.from_request(request)

    def delete(self, request_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            repo.delete(self._get_request(repo, request_id))

        logger.info("Leave request deleted", extra={"request_id": request_id})

    # ------------------------------------------------------------------ #
    # Decisions
    # ------------------------------------------------------------------ #
    def approve(
        self,
        request_id: str,
        approver_id: str,
        comments: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> LeaveRequestResponse:
        """
        Approve a pending request and draw its days from the balance.

        Both steps commit together or not at all.

        Raises:
            InvalidLeaveTransition: If the request is not pending
            InsufficientBalance: If fewer days remain than requested
        """
        stamp = now or datetime.now(timezone.utc)
        values = {"approved_by": approver_id, "approved_at": stamp}
        if comments is not None:
            values["comments"] = comments

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            request = self._get_request(repo, request_id)
            user_id = request.user_id
            leave_type = request.leave_type
            days = request.days_requested
            year = request.balance_year

            self._transition(repo, request, LeaveStatus.APPROVED, values)

            if self._enforce_balance:
                balance_repo = uow.get_repo(LeaveBalanceRepository)
                balance = get_or_allocate_balance(balance_repo, leave_type, user_id, year)
                if not balance_repo.consume(balance, days):
                    logger.warning(
                        "Leave approval rejected for insufficient balance",
                        extra={"request_id": request_id, "remaining": balance.remaining_days},
                    )
                    raise errors.InsufficientBalance(balance.remaining_days, days)

            response = LeaveRequestResponse.from_request(request)

        logger.info(
            "Leave request approved",
            extra={"request_id": request_id, "approver_id": approver_id},
        )
        return response

    def reject(
        self,
        request_id: str,
        approver_id: str,
        comments: Optional[str] = None,
    ) -> LeaveRequestResponse:
        """Reject a pending request; balances are not touched."""
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            request = self._get_request(repo, request_id)
            self._transition(
                repo,
                request,
                LeaveStatus.REJECTED,
                {"comments": comments} if comments is not None else None,
            )
            response = LeaveRequestResponse.from_request(request)

        logger.info(
            "Leave request rejected",
            extra={"request_id": request_id, "approver_id": approver_id},
        )
        return response

    def cancel(self, principal: Principal, request_id: str) -> LeaveRequestResponse:
        """
        Withdraw a pending request. Only the requester may cancel.
        """
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            request = self._get_request(repo, request_id)
            if not principal.is_owner(request.user_id):
                raise PermissionDenied(user_id=principal.user_id, role=principal.role)

            self._transition(repo, request, LeaveStatus.CANCELLED)
            return LeaveRequestResponse.from_request(request)
