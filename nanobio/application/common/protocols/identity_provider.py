from typing import Protocol

from nanobio.domain.common.value_objects import UserId


class IdentityProviderProtocol(Protocol):
    def current_user(self) -> UserId | None: ...
