"""Wellness area actions."""

from fastapi import APIRouter, Depends

from ..auth.dependencies import get_current_user_id
from ..repositories.dependencies import get_repository_container
from ..repositories.interfaces import RepositoryContainer
from ..services import areas as area_actions
from .schemas import (
    ActionResponse,
    AreaCreateInput,
    AreaData,
    AreaListData,
    AreaResponse,
    AreaUpdateInput,
    DeleteInput,
    ProblemDetails,
    SuccessResponse,
)

router = APIRouter(prefix="/v1/actions", tags=["wellness-areas"])

COMMON_ERRORS = {
    401: {"model": ProblemDetails, "description": "Not signed in"},
    422: {"model": ProblemDetails, "description": "Validation error"},
}


@router.post(
    "/listWellnessAreas",
    response_model=ActionResponse[AreaListData],
    responses=COMMON_ERRORS,
)
async def list_wellness_areas(
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[AreaListData]:
    """List the signed-in user's areas, oldest first."""
    areas = await area_actions.list_wellness_areas(repos, user_id)
    items = [AreaResponse.model_validate(area) for area in areas]
    return ActionResponse[AreaListData](data=AreaListData(items=items, total=len(items)))


@router.post(
    "/createWellnessArea",
    response_model=ActionResponse[AreaData],
    responses=COMMON_ERRORS,
)
async def create_wellness_area(
    payload: AreaCreateInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[AreaData]:
    area = await area_actions.create_wellness_area(repos, user_id, payload)
    return ActionResponse[AreaData](data=AreaData(area=AreaResponse.model_validate(area)))


@router.post(
    "/updateWellnessArea",
    response_model=ActionResponse[AreaData],
    responses={
        **COMMON_ERRORS,
        404: {"model": ProblemDetails, "description": "Area not found"},
    },
)
async def update_wellness_area(
    payload: AreaUpdateInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ActionResponse[AreaData]:
    """Only the fields present in the body are changed."""
    area = await area_actions.update_wellness_area(repos, user_id, payload)
    return ActionResponse[AreaData](data=AreaData(area=AreaResponse.model_validate(area)))


@router.post(
    "/deleteWellnessArea",
    response_model=SuccessResponse,
    responses={
        **COMMON_ERRORS,
        404: {"model": ProblemDetails, "description": "Area not found"},
    },
)
async def delete_wellness_area(
    payload: DeleteInput,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> SuccessResponse:
    """
    Delete an area with its goals and every reflection attached to either.
    """
    await area_actions.delete_wellness_area(repos, user_id, payload)
    return SuccessResponse()
