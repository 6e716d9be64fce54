from typing import Protocol

from nanobio.domain.catalog.entities.key_term import KeyTerm
from nanobio.domain.common.value_objects import ModuleId


class KeyTermRepositoryProtocol(Protocol):
    async def find_all(self) -> list[KeyTerm]: ...

    async def find_by_module(self, module_id: ModuleId) -> list[KeyTerm]: ...
