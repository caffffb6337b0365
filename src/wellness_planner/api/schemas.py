"""Pydantic models for action input validation and response envelopes.

Field names are snake_case in Python and camelCase on the wire; both
spellings are accepted on input.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Generic, List, Optional, Tuple, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator  # type: ignore
from pydantic.alias_generators import to_camel

from ..core.enums import GoalPriority, GoalStatus

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ActionInput(BaseModel):
    """Base class for action inputs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class PartialUpdateInput(ActionInput):
    """Input whose explicitly supplied fields become column changes.

    Omitted fields are left untouched; an explicit null clears a nullable
    field. Fields listed in ``required_if_present`` may be omitted but never
    set to null.
    """

    required_if_present: ClassVar[Tuple[str, ...]] = ()

    id: UUID

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in self.required_if_present:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Column changes for the fields the caller actually sent."""
        return self.model_dump(include=self.model_fields_set - {"id"})


class DeleteInput(ActionInput):
    """Input for every delete action."""

    id: UUID


# Area schemas
class AreaCreateInput(ActionInput):
    """Input for createWellnessArea."""

    name: str = Field(description="Area name", min_length=1, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, description="Emoji or icon key", max_length=64)
    sort_order: Optional[int] = None


class AreaUpdateInput(PartialUpdateInput):
    """Input for updateWellnessArea."""

    required_if_present: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=64)
    sort_order: Optional[int] = None


# Goal schemas
class GoalListInput(ActionInput):
    """Input for listWellnessGoals."""

    area_id: Optional[UUID] = None


class GoalCreateInput(ActionInput):
    """Input for createWellnessGoal."""

    area_id: Optional[UUID] = None
    title: str = Field(description="Goal title", min_length=1, max_length=500)
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    status: GoalStatus = GoalStatus.NOT_STARTED
    priority: GoalPriority = GoalPriority.MEDIUM
    progress_percent: Optional[int] = Field(
        None, description="Cached progress, supplied by the caller", ge=0, le=100
    )

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, value):
        return as_utc(value)


class GoalUpdateInput(PartialUpdateInput):
    """Input for updateWellnessGoal."""

    required_if_present: ClassVar[Tuple[str, ...]] = ("title", "status", "priority")

    area_id: Optional[UUID] = None
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    status: Optional[GoalStatus] = None
    priority: Optional[GoalPriority] = None
    progress_percent: Optional[int] = Field(None, ge=0, le=100)

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, value):
        return as_utc(value)


# Reflection schemas
class ReflectionListInput(ActionInput):
    """Input for listWellnessReflections."""

    area_id: Optional[UUID] = None
    goal_id: Optional[UUID] = None
    page: int = Field(1, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class ReflectionCreateInput(ActionInput):
    """Input for createWellnessReflection."""

    area_id: Optional[UUID] = None
    goal_id: Optional[UUID] = None
    entry_date: Optional[datetime] = Field(None, description="Defaults to now")
    mood: Optional[str] = Field(None, description="Free-text mood tag", max_length=64)
    energy_level: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = None

    @field_validator("entry_date")
    @classmethod
    def normalize_entry_date(cls, value):
        return as_utc(value)


# Base response models
class BaseResponse(BaseModel):
    """Base response model with common fields."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs."""

    type: str = Field(description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(
        None, description="A human-readable explanation specific to this occurrence"
    )
    instance: Optional[str] = Field(
        None, description="A URI reference that identifies the specific occurrence"
    )
    success: bool = Field(False, description="Always false for failures")
    code: str = Field(description="Machine-readable error kind")


class AreaResponse(BaseResponse):
    """A wellness area."""

    id: UUID
    user_id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    sort_order: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class GoalResponse(BaseResponse):
    """A wellness goal."""

    id: UUID
    area_id: Optional[UUID] = None
    user_id: str
    title: str
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    status: GoalStatus
    priority: GoalPriority
    progress_percent: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ReflectionResponse(BaseResponse):
    """A wellness reflection."""

    id: UUID
    user_id: str
    area_id: Optional[UUID] = None
    goal_id: Optional[UUID] = None
    entry_date: datetime
    mood: Optional[str] = None
    energy_level: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime


class AreaListData(BaseResponse):
    items: List[AreaResponse]
    total: int


class AreaData(BaseResponse):
    area: AreaResponse


class GoalListData(BaseResponse):
    items: List[GoalResponse]
    total: int


class GoalData(BaseResponse):
    goal: GoalResponse


class ReflectionListData(BaseResponse):
    items: List[ReflectionResponse]
    total: int
    page: int
    page_size: int


class ReflectionData(BaseResponse):
    reflection: ReflectionResponse


DataT = TypeVar("DataT")


class ActionResponse(BaseModel, Generic[DataT]):
    """Success envelope returned by every action that produces data."""

    success: bool = True
    data: DataT


class SuccessResponse(BaseModel):
    """Success envelope for actions without data."""

    success: bool = True
