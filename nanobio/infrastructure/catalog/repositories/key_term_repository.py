"""Repository for KeyTerm domain entities."""

from nanobio.application.common.protocols import RecordStoreProtocol
from nanobio.domain.catalog.entities.key_term import KeyTerm
from nanobio.domain.common.value_objects import ModuleId
from nanobio.infrastructure.catalog.mappers.key_term_mapper import KeyTermMapper

KEY_TERMS_TABLE = "key_terms"
KEY_TERM_COLUMNS = ("id", "module_id", "term", "definition")


class KeyTermRepository:
    """Read-only access to the flashcard deck."""

    def __init__(self, store: RecordStoreProtocol) -> None:
        self.store = store
        self.mapper = KeyTermMapper()

    async def find_all(self) -> list[KeyTerm]:
        records = await self.store.select(KEY_TERMS_TABLE, columns=KEY_TERM_COLUMNS, order_by="id")
        return [self.mapper.to_domain(record) for record in records]

    async def find_by_module(self, module_id: ModuleId) -> list[KeyTerm]:
        records = await self.store.select(
            KEY_TERMS_TABLE, {"module_id": module_id.value}, columns=KEY_TERM_COLUMNS, order_by="id"
        )
        return [self.mapper.to_domain(record) for record in records]
