import pytest

from solr_addon_indexer.addons import AddonConfig, AddonRegistry, FieldConfig, RemoteSource
from solr_addon_indexer.core.errors import StorageError
from solr_addon_indexer.indexing.mapper import DocumentMapper, make_solr_name
from solr_addon_indexer.indexing.records import RowRecord, Tag

from conftest import FakeStorage


def make_mapper(storage, *addons):
    return DocumentMapper(storage, AddonRegistry(addons))


@pytest.mark.asyncio
async def test_item_document(item_addon):
    record = RowRecord(
        "items",
        {"id": 7, "public": True, "description": "<b>Hi</b>"},
        tags=[Tag(name="history")],
    )

    doc = await make_mapper(FakeStorage(), item_addon).map_record(record, item_addon)

    assert doc.as_dict() == {
        "id": "items_7",
        "model": "items",
        "modelid": 7,
        "public": True,
        "item_description_t": ["Hi"],
        "tag": ["history"],
        "resulttype": "Item",
    }

@pytest.mark.asyncio
async def test_untagged_addon_has_no_tag_key(item_addon):
    addon = item_addon.model_copy(update={"tagged": False})
    record = RowRecord("items", {"id": 7, "public": True}, tags=[Tag(name="history")])

    doc = await make_mapper(FakeStorage(), addon).map_record(record, addon)

    assert "tag" not in doc

@pytest.mark.asyncio
async def test_tags_come_from_storage(item_addon):
    storage = FakeStorage(tags={("items", 7): ["a", "b"]})
    record = RowRecord("items", {"id": 7, "public": False}, storage=storage)

    doc = await make_mapper(storage, item_addon).map_record(record, item_addon)

    assert doc["tag"] == ["a", "b"]
    assert doc["public"] is False

@pytest.mark.asyncio
async def test_no_result_type(item_addon):
    addon = item_addon.model_copy(update={"result_type": None})
    doc = await make_mapper(FakeStorage(), addon).map_record(
        RowRecord("items", {"id": 7}, tags=[]), addon
    )

    assert "resulttype" not in doc

@pytest.mark.asyncio
async def test_title_and_multi_valued_fields(exhibit_registry, exhibit_storage):
    pages = exhibit_registry["exhibit_pages"]
    mapper = DocumentMapper(exhibit_storage, exhibit_registry)
    record = RowRecord("exhibit_pages", {"id": 10, "title": "Intro", "exhibit_id": 1})

    doc = await mapper.map_record(record, pages)

    assert doc.id == "exhibit_pages_10"
    assert doc["title"] == ["Intro"]
    assert doc["exhibit_pages_title_t"] == ["Intro"]
    assert doc["exhibit_pages_text_t"] == ["First", "Second"]
    assert doc["public"] is True
    assert doc["resulttype"] == "Exhibit Page"

@pytest.mark.asyncio
async def test_multi_valued_title_keeps_field_order():
    addon = AddonConfig(
        name="item",
        table="items",
        fields=(
            FieldConfig(
                name="label",
                source=RemoteSource(table="labels", foreign_key_attribute="item_id"),
            ),
        ),
        title_field_name="label",
    )
    storage = FakeStorage(tables={"labels": [
        {"id": 1, "item_id": 7, "label": "one"},
        {"id": 2, "item_id": 7, "label": "two"},
    ]})

    doc = await make_mapper(storage, addon).map_record(RowRecord("items", {"id": 7}), addon)

    assert doc["title"] == ["one", "two"]

@pytest.mark.asyncio
async def test_field_names_are_namespaced_by_addon():
    first = AddonConfig(name="exhibit", table="exhibits", fields=(FieldConfig(name="title"),))
    second = AddonConfig(name="page", table="pages", fields=(FieldConfig(name="title"),))
    mapper = make_mapper(FakeStorage(), first, second)

    a = await mapper.map_record(RowRecord("exhibits", {"id": 1, "title": "A"}), first)
    b = await mapper.map_record(RowRecord("pages", {"id": 1, "title": "B"}), second)

    assert make_solr_name(first, "title") == "exhibit_title_t"
    assert make_solr_name(second, "title") == "page_title_t"
    assert a["exhibit_title_t"] == ["A"]
    assert b["page_title_t"] == ["B"]
    assert "title" not in a and "title" not in b

@pytest.mark.asyncio
async def test_failure_produces_no_document(exhibit_registry, exhibit_storage):
    exhibit_storage.broken.add("exhibit_page_blocks")
    mapper = DocumentMapper(exhibit_storage, exhibit_registry)

    with pytest.raises(StorageError):
        await mapper.map_record(
            RowRecord("exhibit_pages", {"id": 10, "title": "Intro", "exhibit_id": 1}),
            exhibit_registry["exhibit_pages"],
        )
