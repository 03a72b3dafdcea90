from functools import lru_cache

from fastapi import Depends

from ..config import settings
from ..addons.loader import load_addons
from ..addons.registry import AddonRegistry
from ..db.session import get_engine
from ..db.storage import SqlStorage
from ..indexing.indexer import AddonIndexer
from ..solr.client import SolrClient

@lru_cache
def get_registry() -> AddonRegistry:
    return load_addons(settings.addons_path)

@lru_cache
def get_storage() -> SqlStorage:
    return SqlStorage(get_engine())

@lru_cache
def get_solr_client() -> SolrClient:
    return SolrClient()

def get_indexer(
    registry: AddonRegistry = Depends(get_registry),
    storage: SqlStorage = Depends(get_storage),
) -> AddonIndexer:
    return AddonIndexer(storage, registry)
