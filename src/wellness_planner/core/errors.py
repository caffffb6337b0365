"""Domain errors raised by action handlers and the storage layer.

These carry no HTTP details of their own beyond a status code hint; the API
layer renders them as RFC 9457 Problem Details.
"""

from typing import Any, Dict, Optional

from .enums import EntityKind, ErrorCode


class WellnessError(Exception):
    """Base class for every error that is reported to the caller."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    title: str = "Internal Server Error"

    def __init__(self, message: str, **extra_fields: Any):
        super().__init__(message)
        self.message = message
        self.extra_fields: Dict[str, Any] = extra_fields

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(code={self.code.value}, message='{self.message}')>"


class UnauthorizedError(WellnessError):
    """No authenticated user is attached to the request."""

    code = ErrorCode.UNAUTHORIZED
    status_code = 401
    title = "Unauthorized"

    def __init__(self, message: str = "You must be signed in to perform this action."):
        super().__init__(message)


class NotFoundError(WellnessError):
    """Record is absent or owned by another user.

    Both cases produce the same error so ids of other users cannot be probed.
    """

    code = ErrorCode.NOT_FOUND
    status_code = 404
    title = "Not Found"

    def __init__(self, kind: EntityKind, message: Optional[str] = None):
        super().__init__(message or f"{kind.label} not found.")
        self.kind = kind


class BadRequestError(WellnessError):
    """Cross-entity consistency violation."""

    code = ErrorCode.BAD_REQUEST
    status_code = 400
    title = "Bad Request"


class StorageError(WellnessError):
    """Wraps a storage backend failure without exposing its details."""

    code = ErrorCode.STORAGE_ERROR
    status_code = 500
    title = "Storage Error"

    def __init__(self, message: str = "A storage error occurred. No changes were saved."):
        super().__init__(message)
