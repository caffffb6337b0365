"""In-memory implementations of repository interfaces for testing."""

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from ..db.models import WellnessArea, WellnessGoal, WellnessReflection
from .interfaces import (
    AreaRepository,
    GoalRepository,
    ReflectionRepository,
    RepositoryContainer,
    UnitOfWork,
)


def _clone(entity):
    """Copy a model instance column by column."""
    values = {column.key: getattr(entity, column.key) for column in entity.__table__.columns}
    return type(entity)(**values)


class MemoryStore:
    """Shared tables for the in-memory repositories."""

    def __init__(self):
        self.tables: Dict[str, Dict[UUID, Any]] = {
            WellnessArea.__tablename__: {},
            WellnessGoal.__tablename__: {},
            WellnessReflection.__tablename__: {},
        }

    def snapshot(self) -> Dict[str, Dict[UUID, Any]]:
        return {
            name: {key: _clone(row) for key, row in rows.items()}
            for name, rows in self.tables.items()
        }

    def restore(self, snapshot: Dict[str, Dict[UUID, Any]]) -> None:
        self.tables = snapshot


class MemoryUnitOfWork(UnitOfWork):
    """Snapshot based unit of work: rollback restores the last commit."""

    def __init__(self, store: MemoryStore):
        self._store = store
        self._snapshot = store.snapshot()

    async def commit(self) -> None:
        """Commit the current transaction."""
        self._snapshot = self._store.snapshot()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        self._store.restore(self._snapshot)
        self._snapshot = self._store.snapshot()


class BaseMemoryRepository:
    """Base in-memory repository implementation."""

    model = None

    def __init__(self, store: MemoryStore):
        self._store = store

    @property
    def _rows(self) -> Dict[UUID, Any]:
        return self._store.tables[self.model.__tablename__]

    def _matching(self, user_id: str, **filters) -> List[Any]:
        rows = []
        for row in self._rows.values():
            if row.user_id != user_id:
                continue
            if all(getattr(row, column) == value for column, value in filters.items()):
                rows.append(row)
        return rows

    def _remove(self, rows: Iterable[Any]) -> int:
        removed = 0
        for row in list(rows):
            if self._rows.pop(row.id, None) is not None:
                removed += 1
        return removed

    async def get_owned(self, entity_id: UUID, user_id: str):
        """Get the record matching both id and owner."""
        row = self._rows.get(entity_id)
        if row is None or row.user_id != user_id:
            return None
        return row

    async def add(self, entity):
        """Store a new record."""
        self._rows[entity.id] = entity
        return entity

    async def update_owned(self, entity_id: UUID, user_id: str, changes: Dict[str, Any]):
        """Apply column changes to an owned record."""
        entity = await self.get_owned(entity_id, user_id)
        if entity is None:
            return None
        for column, value in changes.items():
            setattr(entity, column, value)
        return entity

    async def delete_owned(self, entity_id: UUID, user_id: str) -> int:
        """Delete an owned record."""
        entity = await self.get_owned(entity_id, user_id)
        return self._remove([entity]) if entity is not None else 0


class MemoryAreaRepository(BaseMemoryRepository, AreaRepository):
    """In-memory implementation of AreaRepository."""

    model = WellnessArea

    async def list_for_user(self, user_id: str) -> List[WellnessArea]:
        """Get all areas of a user."""
        return sorted(self._matching(user_id), key=lambda a: (a.created_at, str(a.id)))


class MemoryGoalRepository(BaseMemoryRepository, GoalRepository):
    """In-memory implementation of GoalRepository."""

    model = WellnessGoal

    async def list_for_user(
        self, user_id: str, area_id: Optional[UUID] = None
    ) -> List[WellnessGoal]:
        """Get goals of a user, optionally for one area."""
        filters = {"area_id": area_id} if area_id is not None else {}
        return sorted(
            self._matching(user_id, **filters), key=lambda g: (g.created_at, str(g.id))
        )

    async def list_ids_for_area(self, user_id: str, area_id: UUID) -> List[UUID]:
        """Get ids of the user's goals under an area."""
        return [goal.id for goal in self._matching(user_id, area_id=area_id)]

    async def delete_for_area(self, user_id: str, area_id: UUID) -> int:
        """Delete the user's goals under an area."""
        return self._remove(self._matching(user_id, area_id=area_id))


class MemoryReflectionRepository(BaseMemoryRepository, ReflectionRepository):
    """In-memory implementation of ReflectionRepository."""

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
        filters = {}
        if area_id is not None:
            filters["area_id"] = area_id
        if goal_id is not None:
            filters["goal_id"] = goal_id

        # Newest entry first; id ascending breaks ties
        rows = sorted(self._matching(user_id, **filters), key=lambda r: str(r.id))
        rows.sort(key=lambda r: (r.entry_date, r.created_at), reverse=True)

        end = offset + limit if limit is not None else None
        return rows[offset:end]

    async def delete_for_area(self, user_id: str, area_id: UUID) -> int:
        """Delete the user's reflections referencing an area."""
        return self._remove(self._matching(user_id, area_id=area_id))

    async def delete_for_goals(self, user_id: str, goal_ids: Iterable[UUID]) -> int:
        """Delete the user's reflections referencing any of the goals."""
        goal_ids = set(goal_ids)
        return self._remove(r for r in self._matching(user_id) if r.goal_id in goal_ids)


def create_memory_container(store: Optional[MemoryStore] = None) -> RepositoryContainer:
    """Build a repository container over a (possibly shared) memory store."""
    store = store or MemoryStore()
    return RepositoryContainer(
        area_repo=MemoryAreaRepository(store),
        goal_repo=MemoryGoalRepository(store),
        reflection_repo=MemoryReflectionRepository(store),
        unit_of_work=MemoryUnitOfWork(store),
    )
