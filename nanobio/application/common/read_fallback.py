"""Degraded reads for display views."""

from collections.abc import Awaitable
from typing import TypeVar

import structlog

from nanobio.exceptions import StoreFailureError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def read_or_default(read: Awaitable[T], default: T, *, view: str, source: str) -> T:
    """
    Await a store read, substituting ``default`` if the store fails.

    Only for read-only views: writes must let StoreFailureError propagate.
    """
    try:
        return await read
    except StoreFailureError as e:
        logger.warning("view_read_degraded", view=view, source=source, error=e.message)
        return default
