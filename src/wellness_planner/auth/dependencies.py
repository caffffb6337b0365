"""Authentication dependencies for FastAPI."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.errors import UnauthorizedError
from .jwt_auth import jwt_manager

# Missing credentials are reported by get_current_user_id, not by the scheme
security = HTTPBearer(auto_error=False)


def get_current_user_id_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """
    Get the signed-in user id, or None when no bearer token was sent.

    A token that is present but invalid still fails with UnauthorizedError.
    """
    if credentials is None:
        return None
    return jwt_manager.extract_user_id(credentials.credentials)


def get_current_user_id(
    user_id: Optional[str] = Depends(get_current_user_id_optional),
) -> str:
    """Require a signed-in user. Every action depends on this."""
    if user_id is None:
        raise UnauthorizedError()
    return user_id
