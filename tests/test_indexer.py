import pytest

from solr_addon_indexer.addons import AddonRegistry
from solr_addon_indexer.core.errors import StorageError
from solr_addon_indexer.indexing.indexer import AddonIndexer
from solr_addon_indexer.indexing.records import SelectSpec

from conftest import FakeStorage


@pytest.mark.asyncio
async def test_missing_table_is_skipped(item_addon):
    indexer = AddonIndexer(FakeStorage(), AddonRegistry([item_addon]))

    assert await indexer.index_all_for_addon(item_addon) == []

@pytest.mark.asyncio
async def test_index_addon_rows_in_order(item_addon):
    storage = FakeStorage(tables={"items": [
        {"id": 3, "public": True, "description": "c"},
        {"id": 1, "public": False, "description": "a"},
    ]})
    indexer = AddonIndexer(storage, AddonRegistry([item_addon]))

    docs = await indexer.index_all_for_addon(item_addon)

    assert [d.id for d in docs] == ["items_3", "items_1"]
    assert [d["public"] for d in docs] == [True, False]

@pytest.mark.asyncio
async def test_index_all_preserves_addon_order(exhibit_registry, exhibit_storage):
    indexer = AddonIndexer(exhibit_storage, exhibit_registry)

    docs = await indexer.index_all()

    assert [d.id for d in docs] == [
        "exhibits_1",
        "exhibits_2",
        "exhibit_pages_10",
        "exhibit_pages_11",
        "exhibit_pages_12",
    ]
    assert [d["public"] for d in docs] == [True, False, True, False, True]

@pytest.mark.asyncio
async def test_index_all_with_supplied_addons(exhibit_registry, exhibit_storage):
    indexer = AddonIndexer(exhibit_storage, exhibit_registry)
    pages, exhibits = exhibit_registry["exhibit_pages"], exhibit_registry["exhibits"]

    docs = await indexer.index_all([pages, exhibits])

    assert [d["model"] for d in docs] == ["exhibit_pages"] * 3 + ["exhibits"] * 2

@pytest.mark.asyncio
async def test_missing_table_does_not_stop_other_addons(item_addon, exhibit_addons, exhibit_storage):
    registry = AddonRegistry([item_addon, *exhibit_addons])
    indexer = AddonIndexer(exhibit_storage, registry)

    docs = await indexer.index_all()

    assert len(docs) == 5
    assert all(d["model"] != "items" for d in docs)

@pytest.mark.asyncio
async def test_storage_error_propagates(exhibit_registry, exhibit_storage):
    exhibit_storage.broken.add("exhibit_pages")
    indexer = AddonIndexer(exhibit_storage, exhibit_registry)

    with pytest.raises(StorageError):
        await indexer.index_all()

@pytest.mark.asyncio
async def test_build_select_override(exhibit_registry, exhibit_storage):
    class PublicExhibitsIndexer(AddonIndexer):
        def build_select(self, addon):
            if addon.name == "exhibits":
                return SelectSpec(filters={"public": True})
            return super().build_select(addon)

    indexer = PublicExhibitsIndexer(exhibit_storage, exhibit_registry)

    docs = await indexer.index_all_for_addon(exhibit_registry["exhibits"])

    assert [d.id for d in docs] == ["exhibits_1"]
