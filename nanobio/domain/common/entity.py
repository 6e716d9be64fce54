"""
Base classes for Entities and their identifiers.

Entities keep their identity across state changes: two profiles with the same
id are the same profile even when their experience differs.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, TypeVar

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Opaque string key assigned by the record store.

    Subclasses per aggregate keep a module id from being passed where a
    question id is expected.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError(f"{type(self).__name__} must be a non-empty string")

    def __str__(self) -> str:
        return self.value


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """Identity-compared base; subclasses declare ``id`` as a dataclass field."""

    id: IdType

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"
