"""
Full Reindex Job

Rebuilds the Solr index from every configured addon: optionally clears the
core, then indexes addon by addon and sends each addon's documents in
batches before moving on to the next one.
"""

from __future__ import annotations

import logging
from typing import List

from pydantic import BaseModel, Field

from .indexing.indexer import AddonIndexer
from .solr.client import SolrClient

logger = logging.getLogger("solr.reindex")


class AddonResult(BaseModel):
    name: str
    table: str
    documents: int = Field(..., ge=0)


class ReindexResult(BaseModel):
    addons: List[AddonResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(a.documents for a in self.addons)


async def reindex(
    indexer: AddonIndexer,
    solr: SolrClient,
    batch_size: int = 100,
    clear: bool = True,
) -> ReindexResult:
    """
    Index every addon of ``indexer.registry`` into Solr.

    Storage and Solr errors abort the run; documents of addons already
    processed stay sent.
    """
    if clear:
        await solr.delete_all()

    result = ReindexResult()

    for addon in indexer.registry:
        docs = await indexer.index_all_for_addon(addon)
        sent = await solr.add_documents(docs, batch_size=batch_size)
        result.addons.append(AddonResult(name=addon.name, table=addon.table, documents=sent))

    logger.info(
        "Reindexed %d document(s) from %d addon(s)",
        result.total,
        len(result.addons),
    )
    return result
