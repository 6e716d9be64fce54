"""FastAPI dependencies for authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from nanobio.application.common.protocols import IdentityProviderProtocol
from nanobio.core import container
from nanobio.domain.common.value_objects import UserId
from nanobio.exceptions import CredentialsException, NotAuthenticatedError
from nanobio.infrastructure.identity.identity_provider import TokenIdentityProvider

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> UserId:
    """
    Get the current user id from the bearer token.

    Args:
        credentials: Authorization header parsed by HTTPBearer

    Returns:
        The authenticated user's id

    Raises:
        NotAuthenticatedError: If no bearer token was sent
        CredentialsException: If the token is invalid or expired
    """
    if credentials is None:
        raise NotAuthenticatedError
    provider: IdentityProviderProtocol = TokenIdentityProvider(
        container.token_service(), credentials.credentials
    )
    user_id = provider.current_user()
    if user_id is None:
        raise CredentialsException
    return user_id


CurrentUser = Annotated[UserId, Depends(get_current_user)]
