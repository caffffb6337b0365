"""Abstract repository interfaces for data access layer."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional
from uuid import UUID

from ..core.enums import EntityKind
from ..db.models import WellnessArea, WellnessGoal, WellnessReflection


class OwnedRepository(ABC):
    """Base interface for records that belong to exactly one user.

    Every lookup takes the owner's id; there is no way to read a record
    without stating who is asking.
    """

    kind: EntityKind

    @abstractmethod
    async def get_owned(self, entity_id: UUID, user_id: str):
        """Get the record matching both id and owner, or None."""
        pass

    @abstractmethod
    async def add(self, entity):
        """Persist a new record and return it."""
        pass

    @abstractmethod
    async def update_owned(self, entity_id: UUID, user_id: str, changes: Dict[str, Any]):
        """Apply column changes to an owned record and return it, or None."""
        pass

    @abstractmethod
    async def delete_owned(self, entity_id: UUID, user_id: str) -> int:
        """Delete an owned record. Returns the number of rows removed."""
        pass


class AreaRepository(OwnedRepository):
    """Repository interface for WellnessArea entities."""

    kind = EntityKind.AREA

    @abstractmethod
    async def get_owned(self, entity_id: UUID, user_id: str) -> Optional[WellnessArea]:
        """Get an area by id for its owner."""
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[WellnessArea]:
        """Get all areas of a user, oldest first."""
        pass


class GoalRepository(OwnedRepository):
    """Repository interface for WellnessGoal entities."""

    kind = EntityKind.GOAL

    @abstractmethod
    async def get_owned(self, entity_id: UUID, user_id: str) -> Optional[WellnessGoal]:
        """Get a goal by id for its owner."""
        pass

    @abstractmethod
    async def list_for_user(
        self, user_id: str, area_id: Optional[UUID] = None
    ) -> List[WellnessGoal]:
        """Get goals of a user, optionally restricted to one area, oldest first."""
        pass

    @abstractmethod
    async def list_ids_for_area(self, user_id: str, area_id: UUID) -> List[UUID]:
        """Get ids of the user's goals filed under an area."""
        pass

    @abstractmethod
    async def delete_for_area(self, user_id: str, area_id: UUID) -> int:
        """Delete the user's goals filed under an area."""
        pass


class ReflectionRepository(OwnedRepository):
    """Repository interface for WellnessReflection entities."""

    kind = EntityKind.REFLECTION

    @abstractmethod
    async def get_owned(
        self, entity_id: UUID, user_id: str
    ) -> Optional[WellnessReflection]:
        """Get a reflection by id for its owner."""
        pass

    @abstractmethod
    async def list_for_user(
        self,
        user_id: str,
        area_id: Optional[UUID] = None,
        goal_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[WellnessReflection]:
        """Get a page of reflections, newest entry first, with id as tie-breaker."""
        pass

    @abstractmethod
    async def delete_for_area(self, user_id: str, area_id: UUID) -> int:
        """Delete the user's reflections referencing an area."""
        pass

    @abstractmethod
    async def delete_for_goals(self, user_id: str, goal_ids: Iterable[UUID]) -> int:
        """Delete the user's reflections referencing any of the given goals."""
        pass


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of one request."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["UnitOfWork"]:
        """Scope that commits on success and rolls back on any exception."""
        try:
            yield self
        except BaseException:
            await self.rollback()
            raise
        await self.commit()


class RepositoryContainer:
    """Container for all repository interfaces to support dependency injection."""

    def __init__(
        self,
        area_repo: AreaRepository,
        goal_repo: GoalRepository,
        reflection_repo: ReflectionRepository,
        unit_of_work: UnitOfWork,
    ):
        self.area = area_repo
        self.goal = goal_repo
        self.reflection = reflection_repo
        self.unit_of_work = unit_of_work

    def for_kind(self, kind: EntityKind) -> OwnedRepository:
        """Get the repository responsible for an entity kind."""
        return {
            EntityKind.AREA: self.area,
            EntityKind.GOAL: self.goal,
            EntityKind.REFLECTION: self.reflection,
        }[kind]

    def transaction(self):
        """Open the transactional scope of one action."""
        return self.unit_of_work.transaction()
