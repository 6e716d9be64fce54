from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier (the identity provider's subject)."""


@dataclass(frozen=True)
class ModuleId(EntityId):
    """Strongly-typed module identifier."""


@dataclass(frozen=True)
class QuestionId(EntityId):
    """Strongly-typed question identifier."""


@dataclass(frozen=True)
class KeyTermId(EntityId):
    """Strongly-typed key term (flashcard) identifier."""
