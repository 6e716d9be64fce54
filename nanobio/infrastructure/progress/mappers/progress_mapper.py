"""Mapper for module_progress rows ↔ ModuleProgress entities."""

from typing import Any

from nanobio.domain.common.value_objects import ModuleId, UserId
from nanobio.domain.progress.entities.module_progress import ModuleProgress
from nanobio.infrastructure.common.record_fields import parse_timestamp


class ProgressMapper:
    """Mapper for module_progress rows ↔ ModuleProgress entities."""

    def to_domain(self, record: dict[str, Any]) -> ModuleProgress:
        """Convert a stored row to a domain entity."""
        last_score = record.get("last_score")
        return ModuleProgress(
            user_id=UserId(str(record["user_id"])),
            module_id=ModuleId(str(record["module_id"])),
            completed=bool(record.get("completed")),
            progress=int(record.get("progress") or 0),
            last_score=int(last_score) if last_score is not None else None,
            last_opened=parse_timestamp(record.get("last_opened")),
        )

    def key_fields(self, progress: ModuleProgress) -> dict[str, Any]:
        return {"user_id": progress.user_id.value, "module_id": progress.module_id.value}

    def quiz_result_record(self, progress: ModuleProgress) -> dict[str, Any]:
        """Partial row written when a quiz finishes."""
        return {
            **self.key_fields(progress),
            "completed": progress.completed,
            "last_score": progress.last_score,
        }

    def completion_record(self, progress: ModuleProgress) -> dict[str, Any]:
        """Partial row written when a module is marked complete."""
        return {
            **self.key_fields(progress),
            "completed": progress.completed,
            "progress": progress.progress,
        }

    def opened_record(self, progress: ModuleProgress) -> dict[str, Any]:
        """Partial row written when a lecture is opened."""
        return {**self.key_fields(progress), "last_opened": progress.last_opened}
