"""In-process change feed delivering post-write row snapshots."""

import asyncio
from typing import Final

import structlog

from nanobio.application.common.protocols import ChangeEvent, ChangeType

logger = structlog.get_logger(__name__)

_CLOSED: Final = object()


class ChangeSubscription:
    """
    Async iterator over the events of one (table, change type) pair.

    Events queue up until consumed. ``close`` ends iteration after the
    events already queued have been delivered.
    """

    def __init__(self, feed: "InMemoryChangeFeed", table: str, change_type: ChangeType) -> None:
        self.table = table
        self.change_type = change_type
        self._feed = feed
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def matches(self, event: ChangeEvent) -> bool:
        return event.table == self.table and event.type == self.change_type

    def deliver(self, event: ChangeEvent) -> None:
        if not self._closed:
            self._queue.put_nowait(event)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        self._feed.unsubscribe(self)

    def __aiter__(self) -> "ChangeSubscription":
        return self

    async def __anext__(self) -> ChangeEvent:
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        assert isinstance(item, ChangeEvent)
        return item


class InMemoryChangeFeed:
    """Fan-out of store writes to every matching subscription."""

    def __init__(self) -> None:
        self._subscriptions: list[ChangeSubscription] = []

    def subscribe(self, table: str, change_type: ChangeType) -> ChangeSubscription:
        subscription = ChangeSubscription(self, table, change_type)
        self._subscriptions.append(subscription)
        logger.debug("change_feed_subscribed", table=table, change_type=change_type.value)
        return subscription

    def unsubscribe(self, subscription: ChangeSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    async def publish(self, event: ChangeEvent) -> None:
        for subscription in list(self._subscriptions):
            if subscription.matches(event):
                subscription.deliver(event)
