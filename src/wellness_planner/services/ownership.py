"""Ownership checks shared by every action handler.

A record is visible to a user only when both its id and its owner match.
Missing and foreign records raise the same ``NotFoundError``.
"""

from typing import Optional
from uuid import UUID

from ..core.enums import EntityKind
from ..core.errors import BadRequestError, NotFoundError
from ..db.models import WellnessArea, WellnessGoal, WellnessReflection
from ..repositories.interfaces import RepositoryContainer
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class OwnershipGuard:
    """Fetches records on behalf of a user, failing when the user does not own them."""

    def __init__(self, repos: RepositoryContainer):
        self._repos = repos

    async def fetch_owned(self, kind: EntityKind, entity_id: UUID, user_id: str):
        """
        Fetch the record of ``kind`` matching both ``entity_id`` and ``user_id``.

        Raises:
            NotFoundError: If no such record exists for this user
        """
        record = await self._repos.for_kind(kind).get_owned(entity_id, user_id)
        if record is None:
            logger.info(f"{kind.value} {entity_id} not found for user {user_id}")
            raise NotFoundError(kind)
        return record

    async def area(self, area_id: UUID, user_id: str) -> WellnessArea:
        return await self.fetch_owned(EntityKind.AREA, area_id, user_id)

    async def goal(self, goal_id: UUID, user_id: str) -> WellnessGoal:
        return await self.fetch_owned(EntityKind.GOAL, goal_id, user_id)

    async def reflection(self, reflection_id: UUID, user_id: str) -> WellnessReflection:
        return await self.fetch_owned(EntityKind.REFLECTION, reflection_id, user_id)

    async def area_and_goal(
        self, user_id: str, area_id: Optional[UUID], goal_id: Optional[UUID]
    ) -> None:
        """Verify optional area/goal references and their mutual consistency."""
        if area_id is not None:
            await self.area(area_id, user_id)
        if goal_id is not None:
            goal = await self.goal(goal_id, user_id)
            ensure_goal_in_area(goal, area_id)


def ensure_goal_in_area(goal: WellnessGoal, area_id: Optional[UUID]) -> None:
    """Reject a goal filed under a different area than the one given.

    Goals without an area are compatible with any area.
    """
    if area_id is None or goal.area_id is None:
        return
    if goal.area_id != area_id:
        logger.warning(f"Goal {goal.id} belongs to area {goal.area_id}, not {area_id}")
        raise BadRequestError("Goal does not belong to the specified area.")
