"""Unit tests for the ownership guard."""

from uuid import uuid4

import pytest

from wellness_planner.core.enums import EntityKind
from wellness_planner.core.errors import BadRequestError, NotFoundError
from wellness_planner.db.models import WellnessArea, WellnessGoal, utcnow
from wellness_planner.services.ownership import OwnershipGuard, ensure_goal_in_area


def _goal(user_id, area_id=None):
    now = utcnow()
    return WellnessGoal(
        id=uuid4(),
        user_id=user_id,
        area_id=area_id,
        title="Meditate",
        status="not-started",
        priority="medium",
        created_at=now,
        updated_at=now,
    )


@pytest.mark.unit
class TestFetchOwned:
    """fetch_owned hides foreign and missing records alike."""

    @pytest.mark.asyncio
    async def test_owner_gets_record(self, memory_repos, user_a):
        area = WellnessArea(id=uuid4(), user_id=user_a, name="Mind", created_at=utcnow(), updated_at=utcnow())
        await memory_repos.area.add(area)

        fetched = await OwnershipGuard(memory_repos).fetch_owned(EntityKind.AREA, area.id, user_a)

        assert fetched is area

    @pytest.mark.asyncio
    async def test_foreign_and_missing_look_the_same(self, memory_repos, user_a, user_b):
        goal = _goal(user_a)
        await memory_repos.goal.add(goal)
        guard = OwnershipGuard(memory_repos)

        with pytest.raises(NotFoundError) as foreign:
            await guard.goal(goal.id, user_b)
        with pytest.raises(NotFoundError) as missing:
            await guard.goal(uuid4(), user_a)

        assert foreign.value.message == missing.value.message == "Wellness goal not found."
        assert foreign.value.status_code == 404

    @pytest.mark.asyncio
    async def test_each_kind_has_its_own_message(self, memory_repos, user_a):
        guard = OwnershipGuard(memory_repos)

        for kind in EntityKind:
            with pytest.raises(NotFoundError) as exc_info:
                await guard.fetch_owned(kind, uuid4(), user_a)
            assert exc_info.value.message == f"Wellness {kind.value} not found."


@pytest.mark.unit
class TestGoalAreaConsistency:
    """ensure_goal_in_area and area_and_goal."""

    def test_goal_without_area_is_compatible(self, user_a):
        ensure_goal_in_area(_goal(user_a), uuid4())

    def test_no_area_given_is_compatible(self, user_a):
        ensure_goal_in_area(_goal(user_a, area_id=uuid4()), None)

    def test_mismatch_is_rejected(self, user_a):
        with pytest.raises(BadRequestError) as exc_info:
            ensure_goal_in_area(_goal(user_a, area_id=uuid4()), uuid4())

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_area_and_goal_checks_area_first(self, memory_repos, user_a):
        goal = _goal(user_a)
        await memory_repos.goal.add(goal)

        with pytest.raises(NotFoundError) as exc_info:
            await OwnershipGuard(memory_repos).area_and_goal(user_a, uuid4(), goal.id)

        assert exc_info.value.kind == EntityKind.AREA

    @pytest.mark.asyncio
    async def test_area_and_goal_with_nothing_given(self, memory_repos, user_a):
        await OwnershipGuard(memory_repos).area_and_goal(user_a, None, None)
