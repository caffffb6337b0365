"""Action handlers for wellness areas."""

from typing import List
from uuid import uuid4

from ..api.schemas import AreaCreateInput, AreaUpdateInput, DeleteInput
from ..db.models import WellnessArea, utcnow
from ..repositories.interfaces import RepositoryContainer
from ..utils.logging_config import get_logger
from .ownership import OwnershipGuard

logger = get_logger(__name__)


async def list_wellness_areas(repos: RepositoryContainer, user_id: str) -> List[WellnessArea]:
    """All areas owned by the user."""
    async with repos.transaction():
        return await repos.area.list_for_user(user_id)


async def create_wellness_area(
    repos: RepositoryContainer, user_id: str, payload: AreaCreateInput
) -> WellnessArea:
    """Create an area; both timestamps get the same instant."""
    now = utcnow()
    area = WellnessArea(
        id=uuid4(),
        user_id=user_id,
        name=payload.name,
        description=payload.description,
        icon=payload.icon,
        sort_order=payload.sort_order,
        created_at=now,
        updated_at=now,
    )

    async with repos.transaction():
        await repos.area.add(area)

    logger.info(f"Created area {area.id} for user {user_id}")
    return area


async def update_wellness_area(
    repos: RepositoryContainer, user_id: str, payload: AreaUpdateInput
) -> WellnessArea:
    """Apply the fields present in the payload and refresh ``updated_at``."""
    guard = OwnershipGuard(repos)
    changes = payload.changes()
    changes["updated_at"] = utcnow()

    async with repos.transaction():
        await guard.area(payload.id, user_id)
        area = await repos.area.update_owned(payload.id, user_id, changes)

    logger.info(f"Updated area {payload.id} fields={sorted(changes)}")
    return area


async def delete_wellness_area(
    repos: RepositoryContainer, user_id: str, payload: DeleteInput
) -> None:
    """
    Delete an area together with everything that hangs off it.

    Reflections go first (those filed under the area and those of its goals),
    then the goals, then the area. One transaction covers all three steps.
    """
    guard = OwnershipGuard(repos)

    async with repos.transaction():
        area = await guard.area(payload.id, user_id)
        goal_ids = await repos.goal.list_ids_for_area(user_id, area.id)

        reflections = await repos.reflection.delete_for_area(user_id, area.id)
        reflections += await repos.reflection.delete_for_goals(user_id, goal_ids)
        goals = await repos.goal.delete_for_area(user_id, area.id)
        await repos.area.delete_owned(area.id, user_id)

    logger.info(
        f"Deleted area {payload.id} for user {user_id} "
        f"(goals={goals}, reflections={reflections})"
    )
