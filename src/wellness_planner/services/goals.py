"""Action handlers for wellness goals."""

from typing import List
from uuid import uuid4

from ..api.schemas import DeleteInput, GoalCreateInput, GoalListInput, GoalUpdateInput
from ..db.models import WellnessGoal, utcnow
from ..repositories.interfaces import RepositoryContainer
from ..utils.logging_config import get_logger
from .ownership import OwnershipGuard

logger = get_logger(__name__)


async def list_wellness_goals(
    repos: RepositoryContainer, user_id: str, payload: GoalListInput
) -> List[WellnessGoal]:
    """Goals of the user, restricted to one of their areas when ``area_id`` is given."""
    guard = OwnershipGuard(repos)

    async with repos.transaction():
        if payload.area_id is not None:
            await guard.area(payload.area_id, user_id)
        return await repos.goal.list_for_user(user_id, area_id=payload.area_id)


async def create_wellness_goal(
    repos: RepositoryContainer, user_id: str, payload: GoalCreateInput
) -> WellnessGoal:
    """Create a goal, optionally under an area the user owns."""
    guard = OwnershipGuard(repos)
    now = utcnow()
    goal = WellnessGoal(
        id=uuid4(),
        user_id=user_id,
        area_id=payload.area_id,
        title=payload.title,
        description=payload.description,
        target_date=payload.target_date,
        status=payload.status,
        priority=payload.priority,
        progress_percent=payload.progress_percent,
        created_at=now,
        updated_at=now,
    )

    async with repos.transaction():
        if payload.area_id is not None:
            await guard.area(payload.area_id, user_id)
        await repos.goal.add(goal)

    logger.info(f"Created goal {goal.id} for user {user_id} (area={payload.area_id})")
    return goal


async def update_wellness_goal(
    repos: RepositoryContainer, user_id: str, payload: GoalUpdateInput
) -> WellnessGoal:
    """Partially update a goal. A new area must also belong to the user."""
    guard = OwnershipGuard(repos)
    changes = payload.changes()
    changes["updated_at"] = utcnow()

    async with repos.transaction():
        await guard.goal(payload.id, user_id)
        if payload.area_id is not None:
            await guard.area(payload.area_id, user_id)
        goal = await repos.goal.update_owned(payload.id, user_id, changes)

    logger.info(f"Updated goal {payload.id} fields={sorted(changes)}")
    return goal


async def delete_wellness_goal(
    repos: RepositoryContainer, user_id: str, payload: DeleteInput
) -> None:
    """Delete a goal and its reflections in one transaction."""
    guard = OwnershipGuard(repos)

    async with repos.transaction():
        goal = await guard.goal(payload.id, user_id)
        reflections = await repos.reflection.delete_for_goals(user_id, [goal.id])
        await repos.goal.delete_owned(goal.id, user_id)

    logger.info(f"Deleted goal {payload.id} for user {user_id} (reflections={reflections})")
