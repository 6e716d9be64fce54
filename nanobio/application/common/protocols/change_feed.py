from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol


class ChangeType(StrEnum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"


@dataclass(frozen=True)
class ChangeEvent:
    """Post-write snapshot of one row."""

    table: str
    type: ChangeType
    record: dict[str, Any]


class ChangeSubscriptionProtocol(Protocol):
    def __aiter__(self) -> AsyncIterator[ChangeEvent]: ...

    def close(self) -> None: ...


class ChangeFeedProtocol(Protocol):
    def subscribe(self, table: str, change_type: ChangeType) -> ChangeSubscriptionProtocol: ...

    async def publish(self, event: ChangeEvent) -> None: ...
