"""Shared domain building blocks."""

from .entity import Entity, EntityId
from .exceptions import (
    BusinessRuleViolationError,
    DomainError,
    InvariantViolationError,
    ValidationError,
)
from .percentage import round_half_up_percentage
from .value_object import ValueObject

__all__ = [
    "BusinessRuleViolationError",
    "DomainError",
    "Entity",
    "EntityId",
    "InvariantViolationError",
    "ValidationError",
    "ValueObject",
    "round_half_up_percentage",
]
