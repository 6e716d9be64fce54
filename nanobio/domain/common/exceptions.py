"""
Domain layer exceptions.

Raised by entities and sessions when a learner action breaks a rule. The HTTP
layer maps every ``DomainError`` to a 400 response.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class ValidationError(DomainError):
    """Bad input, e.g. verifying a quiz answer with nothing selected."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        self.field = field
        self.value = value
        details = {"field": field, "value": value}
        super().__init__(message, {k: v for k, v in details.items() if v is not None})


class BusinessRuleViolationError(DomainError):
    """An action that the session's current state does not allow."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        self.rule = rule
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})


class InvariantViolationError(DomainError):
    """An entity would end up in an impossible state."""

    def __init__(self, aggregate: str, invariant: str) -> None:
        self.aggregate = aggregate
        self.invariant = invariant
        super().__init__(f"{aggregate} invariant broken: {invariant}", {"invariant": invariant})
