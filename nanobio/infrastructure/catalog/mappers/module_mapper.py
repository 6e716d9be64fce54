"""Mapper for module rows ↔ Module entities."""

from typing import Any

from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.common.value_objects import ModuleId


class ModuleMapper:
    """Mapper for module rows ↔ Module entities."""

    def to_domain(self, record: dict[str, Any]) -> Module:
        """Convert a stored row to a domain entity."""
        return Module(
            id=ModuleId(str(record["id"])),
            title=record["title"],
            slug=record["slug"],
            difficulty=int(record.get("difficulty") or 1),
            estimated_minutes=int(record.get("estimated_minutes") or 0),
            domain=record.get("domain") or None,
            description=record.get("description"),
            content=record.get("content"),
        )
