"""SQLAlchemy models for the wellness planner."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.types import CHAR, TypeDecorator

from ..core.enums import GoalPriority, GoalStatus
from .database import Base


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class GUID(TypeDecorator):
    """Platform-independent GUID type using CHAR(36) outside PostgreSQL."""

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PG_UUID())
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, UUID):
            return value
        return UUID(value)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime that always round-trips as UTC.

    SQLite drops tzinfo on read, so naive values coming back are tagged UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class WellnessArea(Base):
    """A life area such as Health or Finance."""

    __tablename__ = "wellness_areas"

    id = Column(GUID(), primary_key=True, default=uuid4)
    user_id = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(64), nullable=True)  # emoji or icon key
    sort_order = Column(Integer, nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    __table_args__ = (Index("ix_wellness_area_user", "user_id"),)

    def __repr__(self) -> str:
        return f"<WellnessArea(id={self.id}, name='{self.name}')>"


class WellnessGoal(Base):
    """A goal, optionally filed under an area."""

    __tablename__ = "wellness_goals"

    id = Column(GUID(), primary_key=True, default=uuid4)
    area_id = Column(GUID(), ForeignKey("wellness_areas.id"), nullable=True)
    user_id = Column(String(255), nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    target_date = Column(UTCDateTime(), nullable=True)
    status = Column(String(20), nullable=False, default=GoalStatus.NOT_STARTED.value)
    priority = Column(String(10), nullable=False, default=GoalPriority.MEDIUM.value)
    progress_percent = Column(Integer, nullable=True)  # caller-supplied cache
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_wellness_goal_user", "user_id"),
        Index("ix_wellness_goal_user_area", "user_id", "area_id"),
        CheckConstraint(
            "progress_percent IS NULL OR (progress_percent >= 0 AND progress_percent <= 100)",
            name="ck_wellness_goal_progress_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<WellnessGoal(id={self.id}, title='{self.title}', status='{self.status}')>"


class WellnessReflection(Base):
    """A dated journal entry tied to an area and/or goal."""

    __tablename__ = "wellness_reflections"

    id = Column(GUID(), primary_key=True, default=uuid4)
    user_id = Column(String(255), nullable=False)
    area_id = Column(GUID(), ForeignKey("wellness_areas.id"), nullable=True)
    goal_id = Column(GUID(), ForeignKey("wellness_goals.id"), nullable=True)
    entry_date = Column(UTCDateTime(), nullable=False, default=utcnow)
    mood = Column(String(64), nullable=True)  # free-text tag: "great", "tired", ...
    energy_level = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_wellness_reflection_user_entry", "user_id", "entry_date"),
        Index("ix_wellness_reflection_area", "area_id"),
        Index("ix_wellness_reflection_goal", "goal_id"),
        CheckConstraint(
            "energy_level IS NULL OR (energy_level >= 1 AND energy_level <= 10)",
            name="ck_wellness_reflection_energy_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<WellnessReflection(id={self.id}, entry_date={self.entry_date})>"

