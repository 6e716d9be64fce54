"""Custom exception hierarchy for the Nanobio backend."""

from fastapi import HTTPException
from starlette import status


class NanobioError(Exception):
    """Base exception for all Nanobio errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotAuthenticatedError(NanobioError):
    """No current user."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message, status_code=401)


class NotFoundError(NanobioError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class LearningModuleNotFoundError(NotFoundError):
    """Module not found by id or slug."""

    def __init__(self, module_ref: str | None = None, *, message: str | None = None) -> None:
        self.module_ref = module_ref
        if message:
            super().__init__(message)
        elif module_ref is not None:
            super().__init__(f"Module '{module_ref}' not found")
        else:
            super().__init__("Module not found")


class LearningSessionNotFoundError(NotFoundError):
    """The user has no live session of this kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"No active {kind} session")


class ProfileNotFoundError(NotFoundError):
    """Profile not found error."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"Profile for user {user_id} not found")


class StoreFailureError(NanobioError):
    """A record store read or write failed."""

    def __init__(self, operation: str, table: str, reason: str) -> None:
        self.operation = operation
        self.table = table
        self.reason = reason
        super().__init__(f"Store {operation} on '{table}' failed: {reason}", status_code=503)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
