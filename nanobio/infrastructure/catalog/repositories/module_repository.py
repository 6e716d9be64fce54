"""Repository for Module domain entities."""

from nanobio.application.common.protocols import RecordStoreProtocol
from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.common.value_objects import ModuleId
from nanobio.infrastructure.catalog.mappers.module_mapper import ModuleMapper

MODULES_TABLE = "modules"


class ModuleRepository:
    """Read-only access to the curriculum catalog."""

    def __init__(self, store: RecordStoreProtocol) -> None:
        self.store = store
        self.mapper = ModuleMapper()

    async def find_all(self) -> list[Module]:
        """
        Get every module in the catalog.

        Returns:
            List of module entities ordered by title
        """
        records = await self.store.select(MODULES_TABLE, order_by="title")
        return [self.mapper.to_domain(record) for record in records]

    async def find_by_id(self, module_id: ModuleId) -> Module | None:
        records = await self.store.select(MODULES_TABLE, {"id": module_id.value}, limit=1)
        return self.mapper.to_domain(records[0]) if records else None

    async def find_by_slug(self, slug: str) -> Module | None:
        """
        Find a module by its URL slug.

        Args:
            slug: The module slug

        Returns:
            Module entity if found, None otherwise
        """
        records = await self.store.select(MODULES_TABLE, {"slug": slug}, limit=1)
        return self.mapper.to_domain(records[0]) if records else None

    async def count(self) -> int:
        return await self.store.count(MODULES_TABLE)
