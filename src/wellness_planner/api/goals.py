"""Wellness goal actions."""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from ..auth.dependencies import get_current_user_id
from ..repositories.dependencies import get_repository_container
from ..repositories.interfaces import RepositoryContainer
from ..services import goals as goal_actions
from .schemas import (
    ActionResponse,
    DeleteInput,
    GoalCreateInput,
    GoalData,
    GoalListData,
    GoalListInput,
    GoalResponse,
    GoalUpdateInput,
    ProblemDetails,
    SuccessResponse,
)

router = APIRouter(prefix="/v1/actions", tags=["wellness-goals"])

COMMON_ERRORS = {
    401: {"model": ProblemDetails, "description": "Not signed in"},
    404: {"model": ProblemDetails, "description": "Goal or area not found"},
    422: {"model": ProblemDetails, "description": "Validation error"},
}


@router.post(
    "/listWellnessGoals",
    response_model=ActionResponse[GoalListData],
    responses=COMMON_ERRORS,
)
async def list_wellness_goals(
    payload: Optional[GoalListInput] = Body(None),
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[GoalListData]:
    """List goals, optionally only those of one area."""
    goals = await goal_actions.list_wellness_goals(repos, user_id, payload or GoalListInput())
    items = [GoalResponse.model_validate(goal) for goal in goals]
    return ActionResponse[GoalListData](data=GoalListData(items=items, total=len(items)))


@router.post(
    "/createWellnessGoal",
    response_model=ActionResponse[GoalData],
    responses=COMMON_ERRORS,
)
async def create_wellness_goal(
    payload: GoalCreateInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[GoalData]:
    goal = await goal_actions.create_wellness_goal(repos, user_id, payload)
    return ActionResponse[GoalData](data=GoalData(goal=GoalResponse.model_validate(goal)))


@router.post(
    "/updateWellnessGoal",
    response_model=ActionResponse[GoalData],
    responses=COMMON_ERRORS,
)
async def update_wellness_goal(
    payload: GoalUpdateInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[GoalData]:
    """Sending ``areaId: null`` detaches the goal from its area."""
    goal = await goal_actions.update_wellness_goal(repos, user_id, payload)
    return ActionResponse[GoalData](data=GoalData(goal=GoalResponse.model_validate(goal)))


@router.post(
    "/deleteWellnessGoal",
    response_model=SuccessResponse,
    responses=COMMON_ERRORS,
)
async def delete_wellness_goal(
    payload: DeleteInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> SuccessResponse:
    await goal_actions.delete_wellness_goal(repos, user_id, payload)
    return SuccessResponse()
