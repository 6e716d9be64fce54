from typing import Protocol

from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.common.value_objects import ModuleId


class ModuleRepositoryProtocol(Protocol):
    async def find_all(self) -> list[Module]: ...

    async def find_by_id(self, module_id: ModuleId) -> Module | None: ...

    async def find_by_slug(self, slug: str) -> Module | None: ...

    async def count(self) -> int: ...
