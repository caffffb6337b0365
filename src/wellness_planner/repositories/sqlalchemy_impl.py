"""SQLAlchemy concrete implementations of repository interfaces."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import and_, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import StorageError
from ..db.models import WellnessArea, WellnessGoal, WellnessReflection
from ..utils.logging_config import log_exception
from .interfaces import (
    AreaRepository,
    GoalRepository,
    ReflectionRepository,
    UnitOfWork,
)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Unit of work bound to one SQLAlchemy session."""

    def __init__(self, session: Session):
        self._session = session

    async def commit(self) -> None:
        """Commit the current transaction."""
        self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        self._session.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["SQLAlchemyUnitOfWork"]:
        """Transactional scope that also hides driver errors from callers."""
        try:
            async with super().transaction():
                yield self
        except SQLAlchemyError as exc:
            # Commit failures never reach the base class rollback
            self._session.rollback()
            log_exception("database", exc, {"operation": "transaction"})
            raise StorageError() from exc


class BaseSQLAlchemyRepository:
    """Base SQLAlchemy repository implementation for owned records."""

    model = None

    def __init__(self, session: Session):
        self._session = session

    def _owned_query(self, entity_id: UUID, user_id: str):
        return self._session.query(self.model).filter(
            and_(self.model.id == entity_id, self.model.user_id == user_id)
        )

    async def get_owned(self, entity_id: UUID, user_id: str):
        """Get the record matching both id and owner."""
        return self._owned_query(entity_id, user_id).first()

    async def add(self, entity):
        """Stage a new record and flush it so constraint errors surface early."""
        self._session.add(entity)
        self._session.flush()
        return entity

    async def update_owned(self, entity_id: UUID, user_id: str, changes: Dict[str, Any]):
        """Apply column changes to an owned record."""
        entity = self._owned_query(entity_id, user_id).first()
        if entity is None:
            return None
        for column, value in changes.items():
            setattr(entity, column, value)
        self._session.flush()
        return entity

    async def delete_owned(self, entity_id: UUID, user_id: str) -> int:
        """Delete an owned record."""
        return self._owned_query(entity_id, user_id).delete(synchronize_session=False)


class SQLAlchemyAreaRepository(BaseSQLAlchemyRepository, AreaRepository):
    """SQLAlchemy implementation of AreaRepository."""

    model = WellnessArea

    async def list_for_user(self, user_id: str) -> List[WellnessArea]:
        """Get all areas of a user."""
        return (
            self._session.query(WellnessArea)
            .filter(WellnessArea.user_id == user_id)
            .order_by(WellnessArea.created_at, WellnessArea.id)
            .all()
        )


class SQLAlchemyGoalRepository(BaseSQLAlchemyRepository, GoalRepository):
    """SQLAlchemy implementation of GoalRepository."""

    model = WellnessGoal

    async def list_for_user(
        self, user_id: str, area_id: Optional[UUID] = None
    ) -> List[WellnessGoal]:
        """Get goals of a user, optionally for one area."""
        query = self._session.query(WellnessGoal).filter(WellnessGoal.user_id == user_id)
        if area_id is not None:
            query = query.filter(WellnessGoal.area_id == area_id)
        return query.order_by(WellnessGoal.created_at, WellnessGoal.id).all()

    async def list_ids_for_area(self, user_id: str, area_id: UUID) -> List[UUID]:
        """Get ids of the user's goals under an area."""
        rows = (
            self._session.query(WellnessGoal.id)
            .filter(and_(WellnessGoal.user_id == user_id, WellnessGoal.area_id == area_id))
            .all()
        )
        return [row.id for row in rows]

    async def delete_for_area(self, user_id: str, area_id: UUID) -> int:
        """Delete the user's goals under an area."""
        return (
            self._session.query(WellnessGoal)
            .filter(and_(WellnessGoal.user_id == user_id, WellnessGoal.area_id == area_id))
            .delete(synchronize_session=False)
        )


class SQLAlchemyReflectionRepository(BaseSQLAlchemyRepository, ReflectionRepository):
    """SQLAlchemy implementation of ReflectionRepository."""

    model = WellnessReflection

    async def list_for_user(
        self,
        user_id: str,
        area_id: Optional[UUID] = None,
        goal_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[WellnessReflection]:
        """Get a page of reflections in stable order."""
        query = self._session.query(WellnessReflection).filter(
            WellnessReflection.user_id == user_id
        )
        if area_id is not None:
            query = query.filter(WellnessReflection.area_id == area_id)
        if goal_id is not None:
            query = query.filter(WellnessReflection.goal_id == goal_id)

        query = query.order_by(
            desc(WellnessReflection.entry_date),
            desc(WellnessReflection.created_at),
            WellnessReflection.id,
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    async def delete_for_area(self, user_id: str, area_id: UUID) -> int:
        """Delete the user's reflections referencing an area."""
        return (
            self._session.query(WellnessReflection)
            .filter(
                and_(
                    WellnessReflection.user_id == user_id,
                    WellnessReflection.area_id == area_id,
                )
            )
            .delete(synchronize_session=False)
        )

    async def delete_for_goals(self, user_id: str, goal_ids: Iterable[UUID]) -> int:
        """Delete the user's reflections referencing any of the goals."""
        goal_ids = list(goal_ids)
        if not goal_ids:
            return 0
        return (
            self._session.query(WellnessReflection)
            .filter(
                and_(
                    WellnessReflection.user_id == user_id,
                    WellnessReflection.goal_id.in_(goal_ids),
                )
            )
            .delete(synchronize_session=False)
        )
