"""
Index Routes

Triggers a full reindex of every configured addon.

Security
--------
Protected by `verify_admin`, which requires:
- `x-admin-key` header OR
- `key` query parameter
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Header, status

from .dependencies import get_indexer, get_solr_client
from .models import ReindexResponse
from ..config import settings
from ..indexing.indexer import AddonIndexer
from ..reindex import reindex
from ..solr.client import SolrClient

router = APIRouter(tags=["index"])


# ---------------------------------------------------------------------
# Security Dependency
# ---------------------------------------------------------------------

async def verify_admin(
    x_admin_key: Optional[str] = Header(None, alias="x-admin-key"),
    key: Optional[str] = Query(None)
):
    """
    Verify the request is from an admin using the configured API key.
    Checks header first, then query param.
    """
    expected_key = settings.admin_api_key.get_secret_value() if settings.admin_api_key else None

    if not expected_key:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access is not configured (ADMIN_API_KEY missing)"
        )

    provided_key = x_admin_key or key

    if not provided_key or provided_key != expected_key:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing admin API key"
        )


# ---------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------

@router.post("/index", response_model=ReindexResponse, dependencies=[Depends(verify_admin)])
async def reindex_all(
    clear: bool = Query(True),
    indexer: AddonIndexer = Depends(get_indexer),
    solr: SolrClient = Depends(get_solr_client),
):
    """
    Rebuild the Solr index from every configured addon.
    """
    result = await reindex(
        indexer,
        solr,
        batch_size=settings.index_batch_size,
        clear=clear,
    )
    return ReindexResponse(
        total=result.total,
        addons={a.name: a.documents for a in result.addons},
    )
