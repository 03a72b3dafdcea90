"""
Addon Routes

Read-only endpoints describing the configured addons and previewing the
documents they produce.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from .dependencies import get_registry, get_indexer
from .models import AddonSummary, PreviewResponse
from ..addons.registry import AddonRegistry
from ..indexing.indexer import AddonIndexer

router = APIRouter(prefix="/addons", tags=["addons"])


@router.get("", response_model=List[AddonSummary])
def list_addons(registry: AddonRegistry = Depends(get_registry)):
    return [
        AddonSummary(
            name=addon.name,
            table=addon.table,
            result_type=addon.result_type,
            tagged=addon.tagged,
            title_field=addon.title_field_name,
            parent=addon.parent_name,
            fields=[f.name for f in addon.fields],
        )
        for addon in registry
    ]


@router.get("/{name}/preview", response_model=PreviewResponse)
async def preview_addon(
    name: str,
    limit: int = Query(10, ge=1, le=500),
    indexer: AddonIndexer = Depends(get_indexer),
):
    """
    Map an addon's records without sending them to Solr.

    ``count`` is the number of documents the addon produces; at most
    ``limit`` of them are returned.
    """
    addon = indexer.registry.get(name)
    if addon is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown addon '{name}'",
        )

    docs = await indexer.index_all_for_addon(addon)
    return PreviewResponse(
        addon=name,
        count=len(docs),
        documents=[d.as_dict() for d in docs[:limit]],
    )
