"""JWT access tokens that carry the signed-in user id."""

import jwt
from datetime import datetime, timezone, timedelta
from typing import Dict, Any, Optional
from uuid import uuid4

from ..config import get_config
from ..core.errors import UnauthorizedError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class JWTTokenManager:
    """Issues and verifies HS256 access tokens."""

    def __init__(self):
        """Initialize JWT token manager with configuration."""
        config = get_config()
        self.secret_key = config.app.jwt_secret_key
        self.algorithm = config.app.jwt_algorithm
        self.access_token_expires_minutes = config.app.jwt_access_token_expires_minutes

    def create_access_token(
        self, user_id: str, additional_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Create an access token for a user.

        Args:
            user_id: Opaque id of the identity provider's user
            additional_claims: Optional additional claims to include

        Returns:
            Encoded JWT
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + timedelta(minutes=self.access_token_expires_minutes),
            "jti": str(uuid4()),
            "type": "access",
        }

        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_access_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode access token.

        Raises:
            UnauthorizedError: If token is invalid, expired, or wrong type
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired access token")
            raise UnauthorizedError("Access token has expired.")
        except jwt.InvalidTokenError:
            logger.info("Rejected invalid access token")
            raise UnauthorizedError("Invalid access token.")

        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type.")
        if not payload.get("sub"):
            raise UnauthorizedError("Access token has no subject.")

        return payload

    def extract_user_id(self, token: str) -> str:
        """Return the user id of a valid access token."""
        return str(self.verify_access_token(token)["sub"])


# Global instance
jwt_manager = JWTTokenManager()
