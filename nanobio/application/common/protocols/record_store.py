from collections.abc import Mapping, Sequence
from typing import Any, Protocol

Record = dict[str, Any]
Filters = Mapping[str, Any]


class RecordStoreProtocol(Protocol):
    """
    Generic table-oriented persistence.

    Filters are column/value equality pairs combined with AND. Every method
    may suspend and raises ``StoreFailureError`` when the backend fails.
    """

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        columns: Sequence[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Record]: ...

    async def insert(self, table: str, record: Record) -> Record: ...

    async def update(self, table: str, filters: Filters, patch: Record) -> list[Record]: ...

    async def upsert(self, table: str, record: Record, conflict_keys: Sequence[str]) -> Record: ...

    async def count(self, table: str, filters: Filters | None = None) -> int: ...

    async def rpc(self, name: str, params: Record) -> None: ...
