"""
Base repository with standardized CRUD operations and error handling.

Repositories never commit: they add, flush and query inside the session
owned by the caller's UnitOfWork.
"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.core.logging import get_logger
from app.models.base import BaseModel
from app.services.common.errors import InternalError

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class RepositoryError(InternalError):
    """Unexpected database failure inside a repository."""


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides create, read, update and delete helpers plus paginated
    querying for all domain repositories.
    """

    def __init__(self, model: Type[ModelType], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    # ==================== Create Operations ====================

    def add(self, entity: ModelType) -> ModelType:
        """
        Add an entity and flush it so generated values are populated.

        Raises:
            IntegrityError: On unique or foreign key violations; callers
                translate these into domain conflicts.
            RepositoryError: On any other database failure.
        """
        try:
            self.session.add(entity)
            self.session.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Create {self.model.__name__} failed: {e}")
            raise RepositoryError() from e

        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        try:
            return self.session.get(self.model, id)
        except SQLAlchemyError as e:
            logger.error(f"Find {self.model.__name__} by id failed: {e}")
            raise RepositoryError() from e

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities whose columns equal the given values.

        Args:
            criteria: Column name to value; list/tuple values match with IN
            order_by: Column names, prefixed with '-' for descending
        """
        stmt = select(self.model)
        for key, value in criteria.items():
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple)):
                stmt = stmt.where(column.in_(value))
            else:
                stmt = stmt.where(column == value)

        for field in order_by or []:
            if field.startswith('-'):
                stmt = stmt.order_by(getattr(self.model, field[1:]).desc())
            else:
                stmt = stmt.order_by(getattr(self.model, field))

        return list(self.session.scalars(stmt).unique().all())

    def find_one_by_criteria(self, criteria: Dict[str, Any]) -> Optional[ModelType]:
        results = self.find_by_criteria(criteria)
        return results[0] if results else None

    def find_all(self, order_by: Optional[List[str]] = None) -> List[ModelType]:
        return self.find_by_criteria({}, order_by=order_by)

    def paginate(self, stmt: Select, offset: int, limit: int) -> Tuple[List[ModelType], int]:
        """
        Run a select with offset/limit and return the page plus total count.
        """
        total = self.session.scalar(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        ) or 0
        items = self.session.scalars(stmt.offset(offset).limit(limit)).unique().all()
        return list(items), int(total)

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """Apply field updates to a loaded entity and flush."""
        for key, value in data.items():
            if not hasattr(entity, key):
                raise AttributeError(f"{self.model.__name__} has no field '{key}'")
            setattr(entity, key, value)

        try:
            self.session.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Update {self.model.__name__} failed: {e}")
            raise RepositoryError() from e
        return entity

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        try:
            self.session.delete(entity)
            self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Delete {self.model.__name__} failed: {e}")
            raise RepositoryError() from e

        logger.debug(f"Deleted {self.model.__name__} with id: {entity.id}")

    def count(self, *conditions: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        for condition in conditions:
            stmt = stmt.where(condition)
        return int(self.session.scalar(stmt) or 0)
