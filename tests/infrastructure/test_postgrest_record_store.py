"""Tests for the PostgREST record store using a mocked transport."""

import json
from datetime import UTC, datetime

import httpx
import pytest

from nanobio.application.common.protocols import ChangeType
from nanobio.exceptions import StoreFailureError
from nanobio.infrastructure.store import InMemoryChangeFeed, PostgrestRecordStore

BASE_URL = "https://project.supabase.co"
SERVICE_KEY = "service-role-key"


class RecordingHandler:
    """Returns canned responses and keeps every request."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _store(
    handler: RecordingHandler, change_feed: InMemoryChangeFeed | None = None
) -> PostgrestRecordStore:
    return PostgrestRecordStore(
        f"{BASE_URL}/",
        SERVICE_KEY,
        change_feed=change_feed,
        transport=httpx.MockTransport(handler),
    )


class TestPostgrestReads:
    @pytest.mark.asyncio
    async def test_select_builds_query(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=[{"id": "q-1"}]))
        store = _store(handler)

        rows = await store.select(
            "questions",
            {"topic": "Atomic Layer Deposition", "difficulty": 1},
            columns=["id", "topic"],
            order_by="difficulty",
            limit=5,
        )

        assert rows == [{"id": "q-1"}]
        request = handler.last
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/questions"
        assert request.url.params["topic"] == "eq.Atomic Layer Deposition"
        assert request.url.params["difficulty"] == "eq.1"
        assert request.url.params["select"] == "id,topic"
        assert request.url.params["order"] == "difficulty.asc"
        assert request.url.params["limit"] == "5"
        assert request.headers["apikey"] == SERVICE_KEY
        assert request.headers["authorization"] == f"Bearer {SERVICE_KEY}"
        await store.close()

    @pytest.mark.asyncio
    async def test_boolean_and_null_filters(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=[]))
        store = _store(handler)

        await store.select("module_progress", {"completed": True, "last_score": None})

        assert handler.last.url.params["completed"] == "eq.true"
        assert handler.last.url.params["last_score"] == "is.null"
        await store.close()

    @pytest.mark.asyncio
    async def test_count_reads_content_range(self) -> None:
        handler = RecordingHandler(httpx.Response(200, headers={"Content-Range": "0-3/42"}))
        store = _store(handler)

        assert await store.count("modules") == 42
        assert handler.last.method == "HEAD"
        assert handler.last.headers["prefer"] == "count=exact"
        await store.close()

    @pytest.mark.asyncio
    async def test_count_empty_table(self) -> None:
        handler = RecordingHandler(httpx.Response(200, headers={"Content-Range": "*/0"}))
        store = _store(handler)
        assert await store.count("modules") == 0
        await store.close()


class TestPostgrestWrites:
    @pytest.mark.asyncio
    async def test_upsert_merges_and_publishes(self) -> None:
        row = {"user_id": "u", "module_id": "m", "last_opened": "2026-03-01T09:30:00+00:00"}
        handler = RecordingHandler(httpx.Response(201, json=[row]))
        feed = InMemoryChangeFeed()
        subscription = feed.subscribe("module_progress", ChangeType.UPDATE)
        store = _store(handler, feed)

        opened = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)
        saved = await store.upsert(
            "module_progress",
            {"user_id": "u", "module_id": "m", "last_opened": opened},
            ("user_id", "module_id"),
        )

        assert saved == row
        request = handler.last
        assert request.method == "POST"
        assert request.url.params["on_conflict"] == "user_id,module_id"
        assert "resolution=merge-duplicates" in request.headers["prefer"]
        assert json.loads(request.content)["last_opened"] == "2026-03-01T09:30:00Z"
        assert subscription.pending == 1
        await store.close()

    @pytest.mark.asyncio
    async def test_rpc_posts_parameters(self) -> None:
        handler = RecordingHandler(httpx.Response(204))
        store = _store(handler)

        await store.rpc("increment_xp", {"uid": "u", "x": 50})

        assert handler.last.url.path == "/rest/v1/rpc/increment_xp"
        assert json.loads(handler.last.content) == {"uid": "u", "x": 50}
        await store.close()

    @pytest.mark.asyncio
    async def test_http_error_becomes_store_failure(self) -> None:
        handler = RecordingHandler(httpx.Response(500, text="boom"))
        store = _store(handler)

        with pytest.raises(StoreFailureError) as exc_info:
            await store.insert("user_quiz_attempts", {"user_id": "u"})
        assert exc_info.value.operation == "insert"
        assert exc_info.value.table == "user_quiz_attempts"
        await store.close()

    @pytest.mark.asyncio
    async def test_transport_error_becomes_store_failure(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store = PostgrestRecordStore(BASE_URL, SERVICE_KEY, transport=httpx.MockTransport(refuse))
        with pytest.raises(StoreFailureError):
            await store.select("modules")
        await store.close()
