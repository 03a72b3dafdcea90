"""
SQL Storage

Async SQLAlchemy implementation of the Storage contract.

Addon tables are reflected on first use and cached; the metadata store and
tags are read through the models in ``db.models``.

Error Semantics
---------------
- ``table_exists`` never raises: introspection failures count as "missing".
- Every other operation wraps SQLAlchemy failures (and unknown columns) in
  StorageError.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import MetaData, Table, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from .models import Element, ElementSet, ElementText, RecordTag
from .models import Tag as TagModel
from ..core.errors import StorageError
from ..indexing.records import MetadataText, RowRecord, SelectSpec, Tag

logger = logging.getLogger("solr.storage")


class SqlStorage:
    """
    Reads records, related rows, metadata and tags from a SQL database.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._metadata = MetaData()
        self._tables: Dict[str, Table] = {}

    # ------------------------------------------------------------------
    # Internal Helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _connect(self, action: str) -> AsyncIterator[AsyncConnection]:
        try:
            async with self._engine.connect() as conn:
                yield conn
        except (SQLAlchemyError, KeyError) as exc:
            raise StorageError(f"Failed to {action}: {exc}") from exc

    async def _table(self, conn: AsyncConnection, name: str) -> Table:
        table = self._tables.get(name)
        if table is None:
            table = await conn.run_sync(
                lambda sync_conn: Table(name, self._metadata, autoload_with=sync_conn)
            )
            self._tables[name] = table
        return table

    def _record(self, table: str, row: Any) -> RowRecord:
        return RowRecord(table, row._mapping, storage=self)

    # ------------------------------------------------------------------
    # Storage API
    # ------------------------------------------------------------------

    async def table_exists(self, name: str) -> bool:
        try:
            async with self._engine.connect() as conn:
                return await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).has_table(name)
                )
        except SQLAlchemyError as exc:
            logger.warning("Cannot introspect table %s: %s", name, exc)
            return False

    async def fetch_all(self, table: str, select_spec: SelectSpec) -> List[RowRecord]:
        async with self._connect(f"fetch rows of {table}") as conn:
            t = await self._table(conn, table)
            stmt = select(t)
            for column, value in select_spec.filters.items():
                stmt = stmt.where(t.c[column] == value)
            stmt = stmt.order_by(*(t.c[c] for c in select_spec.order_by if c in t.c))

            result = await conn.execute(stmt)
            return [self._record(table, row) for row in result]

    async def fetch_related(
        self,
        table: str,
        foreign_key_attribute: str,
        record_id: Any,
    ) -> List[RowRecord]:
        async with self._connect(f"fetch related rows of {table}") as conn:
            t = await self._table(conn, table)
            stmt = select(t).where(t.c[foreign_key_attribute] == record_id)
            if "id" in t.c:
                stmt = stmt.order_by(t.c.id)

            result = await conn.execute(stmt)
            return [self._record(table, row) for row in result]

    async def fetch_metadata(
        self,
        record_type: str,
        record_id: Any,
        set_name: str,
        element_name: str,
    ) -> List[MetadataText]:
        stmt = (
            select(ElementText.text, ElementText.html)
            .join(Element, ElementText.element_id == Element.id)
            .join(ElementSet, Element.element_set_id == ElementSet.id)
            .where(
                ElementText.record_type == record_type,
                ElementText.record_id == record_id,
                ElementSet.name == set_name,
                Element.name == element_name,
            )
            .order_by(ElementText.id)
        )

        async with self._connect(f"fetch {set_name}:{element_name} metadata") as conn:
            result = await conn.execute(stmt)
            return [MetadataText(text=row.text, html=bool(row.html)) for row in result]

    async def find_by_id(self, table: str, record_id: Any) -> Optional[RowRecord]:
        async with self._connect(f"find {table} {record_id!r}") as conn:
            t = await self._table(conn, table)
            result = await conn.execute(select(t).where(t.c.id == record_id))
            row = result.first()
            return self._record(table, row) if row is not None else None

    async def fetch_tags(self, record_type: str, record_id: Any) -> List[Tag]:
        stmt = (
            select(TagModel.name)
            .join(RecordTag, RecordTag.tag_id == TagModel.id)
            .where(
                RecordTag.record_type == record_type,
                RecordTag.record_id == record_id,
            )
            .order_by(TagModel.name)
        )

        async with self._connect(f"fetch tags of {record_type} {record_id!r}") as conn:
            result = await conn.execute(stmt)
            return [Tag(name=row.name) for row in result]
