"""
Addon Indexer

Walks the configured addons, fetches each addon's rows and maps every row
into a SolrDocument.

Behavior
--------
- Addons are visited in the order supplied; rows keep the storage order.
- An addon whose table does not exist is skipped without error.
- Any other storage error aborts the addon (and the run) and propagates.
- Records are processed one at a time; a document is either complete or
  not produced at all.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from .document import SolrDocument
from .mapper import DocumentMapper
from .records import Record, SelectSpec, Storage
from ..addons.models import AddonConfig
from ..addons.registry import AddonRegistry
from ..core.errors import MissingSchema

logger = logging.getLogger("solr.indexer")


class AddonIndexer:
    """
    Produces the documents for every record of the configured addons.

    Subclasses may override ``build_select`` to restrict the rows indexed.
    """

    def __init__(
        self,
        storage: Storage,
        registry: AddonRegistry,
        mapper: DocumentMapper | None = None,
    ) -> None:
        self.storage = storage
        self.registry = registry
        self.mapper = mapper or DocumentMapper(storage, registry)

    def build_select(self, addon: AddonConfig) -> SelectSpec:
        """Return the selection of rows to index for ``addon`` (all of them)."""
        return SelectSpec()

    async def index_all(
        self,
        addons: Iterable[AddonConfig] | None = None,
    ) -> List[SolrDocument]:
        """
        Return the documents for all addons, defaulting to the registry.
        """
        if addons is None:
            addons = self.registry

        docs: List[SolrDocument] = []
        for addon in addons:
            docs.extend(await self.index_all_for_addon(addon))
        return docs

    async def index_all_for_addon(self, addon: AddonConfig) -> List[SolrDocument]:
        """
        Return the documents for every row of one addon's table.
        """
        try:
            rows = await self._fetch_rows(addon)
        except MissingSchema as exc:
            logger.debug("Skipping addon %s: %s", addon.name, exc)
            return []

        docs = [await self.index_record(record, addon) for record in rows]
        logger.info("Addon %s: %d document(s)", addon.name, len(docs))
        return docs

    async def index_record(self, record: Record, addon: AddonConfig) -> SolrDocument:
        return await self.mapper.map_record(record, addon)

    async def _fetch_rows(self, addon: AddonConfig) -> List[Record]:
        if not await self.storage.table_exists(addon.table):
            raise MissingSchema(addon.table)
        return await self.storage.fetch_all(addon.table, self.build_select(addon))
