"""Record store over a Supabase/PostgREST HTTP endpoint."""

from collections.abc import Sequence
from typing import Any

import httpx
import structlog
from pydantic_core import to_jsonable_python

from nanobio.application.common.protocols import (
    ChangeEvent,
    ChangeFeedProtocol,
    ChangeType,
    Filters,
    Record,
)
from nanobio.exceptions import StoreFailureError

logger = structlog.get_logger(__name__)


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _filter_params(filters: Filters | None) -> dict[str, str]:
    """PostgREST horizontal filters: ``column=eq.value`` or ``column=is.null``."""
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        operator = "is" if value is None else "eq"
        params[column] = f"{operator}.{_encode_value(value)}"
    return params


class PostgrestRecordStore:
    """
    HTTP client for the PostgREST API in front of the platform database.

    Authenticates with a service key, so row-level security is bypassed;
    callers always pass the user id explicitly in filters and procedure
    parameters. Writes request ``return=representation`` and publish the
    returned rows to the change feed.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        change_feed: ChangeFeedProtocol | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.change_feed = change_feed
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/rest/v1",
            headers={"apikey": api_key, "Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self, operation: str, table: str, method: str, path: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "store_operation_failed",
                operation=operation,
                table=table,
                status_code=e.response.status_code,
            )
            raise StoreFailureError(operation, table, e.response.text or str(e)) from e
        except httpx.HTTPError as e:
            logger.warning("store_operation_failed", operation=operation, table=table, error=str(e))
            raise StoreFailureError(operation, table, str(e)) from e
        return response

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        columns: Sequence[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Record]:
        params = _filter_params(filters)
        params["select"] = ",".join(columns) if columns else "*"
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)
        response = await self._request("select", table, "GET", f"/{table}", params=params)
        return list(response.json())

    async def insert(self, table: str, record: Record) -> Record:
        response = await self._request(
            "insert",
            table,
            "POST",
            f"/{table}",
            json=to_jsonable_python(record),
            headers={"Prefer": "return=representation"},
        )
        rows = list(response.json())
        await self._publish(table, ChangeType.INSERT, rows)
        return rows[0] if rows else dict(record)

    async def update(self, table: str, filters: Filters, patch: Record) -> list[Record]:
        response = await self._request(
            "update",
            table,
            "PATCH",
            f"/{table}",
            params=_filter_params(filters),
            json=to_jsonable_python(patch),
            headers={"Prefer": "return=representation"},
        )
        rows = list(response.json())
        await self._publish(table, ChangeType.UPDATE, rows)
        return rows

    async def upsert(self, table: str, record: Record, conflict_keys: Sequence[str]) -> Record:
        # PostgREST does not say whether the row was inserted or merged
        response = await self._request(
            "upsert",
            table,
            "POST",
            f"/{table}",
            params={"on_conflict": ",".join(conflict_keys)},
            json=to_jsonable_python(record),
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        rows = list(response.json())
        await self._publish(table, ChangeType.UPDATE, rows)
        return rows[0] if rows else dict(record)

    async def count(self, table: str, filters: Filters | None = None) -> int:
        params = _filter_params(filters)
        params["select"] = "*"
        response = await self._request(
            "count", table, "HEAD", f"/{table}", params=params, headers={"Prefer": "count=exact"}
        )
        # Content-Range: 0-24/26, or */0 when empty
        content_range = response.headers.get("content-range", "*/0")
        total = content_range.rsplit("/", 1)[-1]
        return int(total) if total.isdigit() else 0

    async def rpc(self, name: str, params: Record) -> None:
        await self._request("rpc", name, "POST", f"/rpc/{name}", json=to_jsonable_python(params))

    async def _publish(self, table: str, change_type: ChangeType, rows: list[Record]) -> None:
        if self.change_feed is None:
            return
        for row in rows:
            await self.change_feed.publish(ChangeEvent(table=table, type=change_type, record=row))
