"""Wellness reflection actions."""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from ..auth.dependencies import get_current_user_id
from ..repositories.dependencies import get_repository_container
from ..repositories.interfaces import RepositoryContainer
from ..services import reflections as reflection_actions
from .schemas import (
    ActionResponse,
    DeleteInput,
    ProblemDetails,
    ReflectionCreateInput,
    ReflectionData,
    ReflectionListData,
    ReflectionListInput,
    ReflectionResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/v1/actions", tags=["wellness-reflections"])

COMMON_ERRORS = {
    400: {"model": ProblemDetails, "description": "Goal is filed under another area"},
    401: {"model": ProblemDetails, "description": "Not signed in"},
    404: {"model": ProblemDetails, "description": "Referenced record not found"},
    422: {"model": ProblemDetails, "description": "Validation error"},
}


@router.post(
    "/listWellnessReflections",
    response_model=ActionResponse[ReflectionListData],
    responses=COMMON_ERRORS,
)
async def list_wellness_reflections(
    payload: Optional[ReflectionListInput] = Body(None),
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[ReflectionListData]:
    """
    Page through reflections, newest entry first.

    Filtering by both area and goal requires the goal to be compatible with
    the area.
    """
    page = await reflection_actions.list_wellness_reflections(
        repos, user_id, payload or ReflectionListInput()
    )
    return ActionResponse[ReflectionListData](
        data=ReflectionListData(
            items=[ReflectionResponse.model_validate(item) for item in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
        )
    )


@router.post(
    "/createWellnessReflection",
    response_model=ActionResponse[ReflectionData],
    responses=COMMON_ERRORS,
)
async def create_wellness_reflection(
    payload: ReflectionCreateInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[ReflectionData]:
    reflection = await reflection_actions.create_wellness_reflection(repos, user_id, payload)
    return ActionResponse[ReflectionData](
        data=ReflectionData(reflection=ReflectionResponse.model_validate(reflection))
    )


@router.post(
    "/deleteWellnessReflection",
    response_model=SuccessResponse,
    responses=COMMON_ERRORS,
)
async def delete_wellness_reflection(
    payload: DeleteInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> SuccessResponse:
    await reflection_actions.delete_wellness_reflection(repos, user_id, payload)
    return SuccessResponse()
