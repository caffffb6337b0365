"""Enums for the wellness planner application."""

from enum import Enum


class GoalStatus(str, Enum):
    """Status label of a wellness goal. No transition rules are enforced."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    PAUSED = "paused"


class GoalPriority(str, Enum):
    """Priority of a wellness goal."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EntityKind(str, Enum):
    """Kinds of user-owned records."""

    AREA = "area"
    GOAL = "goal"
    REFLECTION = "reflection"

    @property
    def label(self) -> str:
        """Human readable name used in error messages."""
        return f"Wellness {self.value}"


class ErrorCode(str, Enum):
    """Machine-readable error kinds returned to API callers."""

    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
