"""Record store over SQLAlchemy's asyncio extension."""

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

import structlog
from sqlalchemy import ColumnElement, Table, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nanobio import models  # noqa: F401  (registers tables on Base.metadata)
from nanobio.application.common.protocols import (
    ChangeEvent,
    ChangeFeedProtocol,
    ChangeType,
    Filters,
    Record,
)
from nanobio.database import Base
from nanobio.exceptions import StoreFailureError
from nanobio.infrastructure.store.procedures import DEFAULT_PROCEDURES, Procedure

logger = structlog.get_logger(__name__)

_UPSERT_INSERTS: dict[str, Callable[[Table], Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@contextmanager
def _store_errors(operation: str, table: str) -> Iterator[None]:
    """Translate backend errors into StoreFailureError."""
    try:
        yield
    except (SQLAlchemyError, KeyError) as e:
        logger.warning("store_operation_failed", operation=operation, table=table, error=str(e))
        raise StoreFailureError(operation, table, str(e)) from e


class SqlRecordStore:
    """
    Generic table access over the ORM metadata.

    Each call runs in its own session and transaction. Successful writes
    are published to the change feed after commit, one event per row.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        change_feed: ChangeFeedProtocol | None = None,
        procedures: Mapping[str, Procedure] | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.change_feed = change_feed
        self.procedures = dict(DEFAULT_PROCEDURES if procedures is None else procedures)

    @staticmethod
    def _table(name: str) -> Table:
        return Base.metadata.tables[name]

    @staticmethod
    def _where(table: Table, filters: Filters | None) -> list[ColumnElement[bool]]:
        return [table.c[column] == value for column, value in (filters or {}).items()]

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
        with _store_errors("select", table):
            tbl = self._table(table)
            selected = [tbl.c[c] for c in columns] if columns else list(tbl.c)
            stmt = select(*selected).where(*self._where(tbl, filters))
            if order_by:
                column = tbl.c[order_by]
                stmt = stmt.order_by(column.desc() if descending else column.asc())
            if limit is not None:
                stmt = stmt.limit(limit)
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return [dict(row) for row in result.mappings().all()]

    async def insert(self, table: str, record: Record) -> Record:
        with _store_errors("insert", table):
            tbl = self._table(table)
            async with self.session_factory() as session, session.begin():
                result = await session.execute(insert(tbl).values(**record).returning(*tbl.c))
                row = dict(result.mappings().one())
        await self._publish(table, ChangeType.INSERT, [row])
        return row

    async def update(self, table: str, filters: Filters, patch: Record) -> list[Record]:
        with _store_errors("update", table):
            tbl = self._table(table)
            stmt = update(tbl).where(*self._where(tbl, filters)).values(**patch).returning(*tbl.c)
            async with self.session_factory() as session, session.begin():
                result = await session.execute(stmt)
                rows = [dict(row) for row in result.mappings().all()]
        await self._publish(table, ChangeType.UPDATE, rows)
        return rows

    async def upsert(self, table: str, record: Record, conflict_keys: Sequence[str]) -> Record:
        """
        Insert ``record`` or merge it into the row matching ``conflict_keys``.

        Runs as one ``INSERT ... ON CONFLICT DO UPDATE`` statement, so
        concurrent first writes of the same key merge instead of failing on
        the unique constraint. On conflict only the supplied columns are
        written, so callers can upsert partial rows without clobbering other
        fields. Published as UPDATE, since the statement does not report
        which branch it took.
        """
        with _store_errors("upsert", table):
            tbl = self._table(table)
            key_columns = [tbl.c[key] for key in conflict_keys]
            async with self.session_factory() as session, session.begin():
                stmt = self._dialect_insert(session, table)(tbl).values(**record)
                patch = {k: stmt.excluded[k] for k in record if k not in conflict_keys}
                if patch:
                    stmt = stmt.on_conflict_do_update(index_elements=key_columns, set_=patch)
                else:
                    stmt = stmt.on_conflict_do_nothing(index_elements=key_columns)
                result = await session.execute(stmt.returning(*tbl.c))
                found = result.mappings().first()
                if found is None:
                    key_filter = {key: record[key] for key in conflict_keys}
                    existing = select(tbl).where(*self._where(tbl, key_filter))
                    found = (await session.execute(existing)).mappings().one()
                row = dict(found)
        await self._publish(table, ChangeType.UPDATE, [row])
        return row

    @staticmethod
    def _dialect_insert(session: AsyncSession, table: str) -> Callable[[Table], Any]:
        dialect = session.get_bind().dialect.name
        insert_for = _UPSERT_INSERTS.get(dialect)
        if insert_for is None:
            raise StoreFailureError("upsert", table, f"no upsert support for {dialect}")
        return insert_for

    async def count(self, table: str, filters: Filters | None = None) -> int:
        with _store_errors("count", table):
            tbl = self._table(table)
            stmt = select(func.count()).select_from(tbl).where(*self._where(tbl, filters))
            async with self.session_factory() as session:
                return int((await session.execute(stmt)).scalar_one())

    async def rpc(self, name: str, params: Record) -> None:
        procedure = self.procedures.get(name)
        if procedure is None:
            raise StoreFailureError("rpc", name, "unknown procedure")
        with _store_errors("rpc", name):
            async with self.session_factory() as session, session.begin():
                events = await procedure(session, params)
        for event in events:
            await self._emit(event)

    async def _publish(self, table: str, change_type: ChangeType, rows: list[Record]) -> None:
        for row in rows:
            await self._emit(ChangeEvent(table=table, type=change_type, record=row))

    async def _emit(self, event: ChangeEvent) -> None:
        if self.change_feed is not None:
            await self.change_feed.publish(event)
