"""
Base class for Value Objects.

Value objects are immutable and compared by their attributes. Subclasses are
frozen dataclasses, which supply equality, hashing and repr; validation lives
in ``__post_init__``.

Example:
    @dataclass(frozen=True)
    class OptionLabel(ValueObject):
        value: str
"""

from dataclasses import asdict, fields, is_dataclass


class ValueObject:
    """Marker base for value objects in the domain model."""

    def to_primitive(self) -> object:
        """Single-field objects collapse to the bare value, others to a dict."""
        if not is_dataclass(self):
            raise TypeError(f"{self.__class__.__name__} must be a dataclass")
        own_fields = fields(self)
        if len(own_fields) == 1:
            return getattr(self, own_fields[0].name)
        return asdict(self)
