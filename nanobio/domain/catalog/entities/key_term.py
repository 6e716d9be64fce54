"""
Key term entity, reviewed as a flashcard.
"""

from dataclasses import dataclass

from nanobio.domain.common.entity import Entity
from nanobio.domain.common.exceptions import ValidationError
from nanobio.domain.common.value_objects import KeyTermId, ModuleId


@dataclass(eq=False)
class KeyTerm(Entity[KeyTermId]):
    """
    Term/definition pair, optionally attached to a module.

    Business Rules:
    - Term and definition cannot be empty
    """

    id: KeyTermId
    term: str
    definition: str
    module_id: ModuleId | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.term or not self.term.strip():
            raise ValidationError("Term cannot be empty", field="term")
        if not self.definition or not self.definition.strip():
            raise ValidationError("Definition cannot be empty", field="definition")
