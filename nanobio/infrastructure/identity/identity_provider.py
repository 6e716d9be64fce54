"""Identity provider backed by a verified bearer token."""

from nanobio.domain.common.value_objects import UserId
from nanobio.infrastructure.identity.token_service import TokenService


class TokenIdentityProvider:
    """Resolves the current user from one request's access token."""

    def __init__(self, token_service: TokenService, token: str | None) -> None:
        self.token_service = token_service
        self.token = token

    def current_user(self) -> UserId | None:
        if not self.token:
            return None
        return self.token_service.verify_access_token(self.token)
