"""Verification of access tokens issued by the Supabase auth service."""

import jwt
import structlog
from jwt import InvalidTokenError

from nanobio.config import Settings
from nanobio.domain.common.value_objects import UserId

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"


class TokenService:
    """
    Verify HS256 access tokens signed with the project's JWT secret.

    Tokens are only verified, never issued; sign-in happens against the
    auth service directly.
    """

    def __init__(self, secret: str, audience: str) -> None:
        self.secret = secret
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(secret=settings.SUPABASE_JWT_SECRET, audience=settings.JWT_AUDIENCE)

    def verify_access_token(self, token: str) -> UserId | None:
        """
        Verify an access token and return the subject if valid.

        Returns:
            The user id from the ``sub`` claim, or None for any invalid token
        """
        if not self.secret:
            logger.warning("jwt_secret_not_configured")
            return None
        try:
            payload = jwt.decode(
                token, self.secret, algorithms=[ALGORITHM], audience=self.audience
            )
        except InvalidTokenError as e:
            logger.debug("access_token_rejected", reason=str(e))
            return None
        subject = payload.get("sub")
        if not subject:
            return None
        return UserId(str(subject))
