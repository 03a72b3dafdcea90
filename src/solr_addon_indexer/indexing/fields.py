"""
Field Value Resolver

Fetches the raw values of one configured field for one record and
sanitizes them. The result is always a list: remote and metadata sources
are multi-valued, and a missing local value yields an empty list.
"""

from __future__ import annotations

import logging
from typing import List

from .records import Record, Storage
from .sanitize import filter_html
from ..addons.models import FieldConfig, LocalSource, MetadataSource, RemoteSource

logger = logging.getLogger("solr.fields")


class FieldValueResolver:
    """
    Resolves field values against a storage backend.

    Storage failures are not caught here; they propagate to the indexer.
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    async def resolve(
        self,
        record: Record,
        field: FieldConfig,
        record_type: str,
    ) -> List[str]:
        """
        Return the sanitized values of ``field`` for ``record``.

        Parameters
        ----------
        record : Record
            The record being indexed.
        field : FieldConfig
            Where and how to read the value.
        record_type : str
            The table the record belongs to, used to key metadata lookups.
        """
        match field.source:
            case RemoteSource(table=table, foreign_key_attribute=key):
                values = await self._remote_values(record, field, table, key)
            case MetadataSource(set_name=set_name, element_name=element_name):
                values = await self._metadata_values(
                    record, field, record_type, set_name, element_name
                )
            case LocalSource():
                values = [filter_html(record.get_attribute(field.name), field.is_html)]
            case other:
                raise TypeError(f"Unsupported field source: {other!r}")

        return [v for v in values if v is not None]

    async def _remote_values(
        self,
        record: Record,
        field: FieldConfig,
        table: str,
        key: str,
    ) -> List[str | None]:
        rows = await self._storage.fetch_related(table, key, record.get_id())
        logger.debug(
            "Field %s: %d related row(s) in %s for record %s",
            field.name, len(rows), table, record.get_id(),
        )
        return [filter_html(row.get_attribute(field.name), field.is_html) for row in rows]

    async def _metadata_values(
        self,
        record: Record,
        field: FieldConfig,
        record_type: str,
        set_name: str,
        element_name: str,
    ) -> List[str | None]:
        texts = await self._storage.fetch_metadata(
            record_type, record.get_id(), set_name, element_name
        )
        return [filter_html(t.text, field.is_html or t.html) for t in texts]
