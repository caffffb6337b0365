"""Action handlers for wellness reflections."""

from dataclasses import dataclass
from typing import List
from uuid import uuid4

from ..api.schemas import DeleteInput, ReflectionCreateInput, ReflectionListInput
from ..db.models import WellnessReflection, utcnow
from ..repositories.interfaces import RepositoryContainer
from ..utils.logging_config import get_logger
from .ownership import OwnershipGuard

logger = get_logger(__name__)


@dataclass
class ReflectionPage:
    """One page of reflections."""

    items: List[WellnessReflection]
    page: int
    page_size: int

    @property
    def total(self) -> int:
        return len(self.items)


async def list_wellness_reflections(
    repos: RepositoryContainer, user_id: str, payload: ReflectionListInput
) -> ReflectionPage:
    """Page through the user's reflections, optionally by area and/or goal."""
    guard = OwnershipGuard(repos)

    async with repos.transaction():
        await guard.area_and_goal(user_id, payload.area_id, payload.goal_id)
        items = await repos.reflection.list_for_user(
            user_id,
            area_id=payload.area_id,
            goal_id=payload.goal_id,
            limit=payload.page_size,
            offset=payload.offset,
        )

    return ReflectionPage(items=items, page=payload.page, page_size=payload.page_size)


async def create_wellness_reflection(
    repos: RepositoryContainer, user_id: str, payload: ReflectionCreateInput
) -> WellnessReflection:
    """Log a reflection. ``entry_date`` defaults to the creation time."""
    guard = OwnershipGuard(repos)
    now = utcnow()
    reflection = WellnessReflection(
        id=uuid4(),
        user_id=user_id,
        area_id=payload.area_id,
        goal_id=payload.goal_id,
        entry_date=payload.entry_date or now,
        mood=payload.mood,
        energy_level=payload.energy_level,
        notes=payload.notes,
        created_at=now,
    )

    async with repos.transaction():
        await guard.area_and_goal(user_id, payload.area_id, payload.goal_id)
        await repos.reflection.add(reflection)

    logger.info(f"Created reflection {reflection.id} for user {user_id}")
    return reflection


async def delete_wellness_reflection(
    repos: RepositoryContainer, user_id: str, payload: DeleteInput
) -> None:
    """Delete one reflection."""
    guard = OwnershipGuard(repos)

    async with repos.transaction():
        reflection = await guard.reflection(payload.id, user_id)
        await repos.reflection.delete_owned(reflection.id, user_id)

    logger.info(f"Deleted reflection {payload.id} for user {user_id}")
