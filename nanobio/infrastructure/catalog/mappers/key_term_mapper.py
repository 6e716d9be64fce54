"""Mapper for key_terms rows ↔ KeyTerm entities."""

from typing import Any

from nanobio.domain.catalog.entities.key_term import KeyTerm
from nanobio.domain.common.value_objects import KeyTermId, ModuleId


class KeyTermMapper:
    """Mapper for key_terms rows ↔ KeyTerm entities."""

    def to_domain(self, record: dict[str, Any]) -> KeyTerm:
        """Convert a stored row to a domain entity."""
        module_id = record.get("module_id")
        return KeyTerm(
            id=KeyTermId(str(record["id"])),
            term=record["term"],
            definition=record["definition"],
            module_id=ModuleId(str(module_id)) if module_id else None,
        )
