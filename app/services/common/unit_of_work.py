# app/services/common/unit_of_work.py
"""
Transaction boundary for service calls.

One session per `with` block: it commits when the block exits cleanly
and rolls back when any exception escapes, so a service that raises a
domain error half-way (for example an approval that runs out of leave
balance) leaves nothing behind.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.repositories.base.base_repository import BaseRepository

from .errors import InternalError

logger = get_logger(__name__)

TRepository = TypeVar("TRepository", bound=BaseRepository)


class UnitOfWork:
    """
    Usage:
        >>> with UnitOfWork(session_factory) as uow:
        ...     repo = uow.get_repo(LeaveRequestRepository)
        ...     repo.add(request)
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self._session: Optional[Session] = None
        self._repos: Dict[Type[BaseRepository], BaseRepository] = {}

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork used outside of its with-block")
        return self._session

    def __enter__(self) -> "UnitOfWork":
        if self._session is not None:
            raise RuntimeError("UnitOfWork is not re-entrant")
        self._session = self._session_factory()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        session = self.session
        try:
            if exc_type is None:
                self._commit(session)
            else:
                session.rollback()
                logger.debug("Transaction rolled back", extra={"error_type": exc_type.__name__})
        finally:
            session.close()
            self._session = None
            self._repos.clear()
        return False

    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Commit failed", extra={"error_type": type(exc).__name__})
            raise InternalError("Could not save changes") from exc

    def flush(self) -> None:
        """Flush pending changes; integrity errors propagate to the caller."""
        self.session.flush()

    def refresh(self, instance: Any) -> None:
        self.session.refresh(instance)

    def get_repo(self, repo_cls: Type[TRepository]) -> TRepository:
        """Repository bound to this block's session, one instance per class."""
        repo = self._repos.get(repo_cls)
        if repo is None:
            repo = self._repos[repo_cls] = repo_cls(self.session)
        return repo  # type: ignore[return-value]
