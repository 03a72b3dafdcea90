from typing import Any, Dict, List, Optional, Tuple

import pytest

from solr_addon_indexer.addons import (
    AddonConfig,
    AddonRegistry,
    FieldConfig,
    MetadataSource,
    RemoteSource,
    visibility_from,
)
from solr_addon_indexer.core.errors import StorageError
from solr_addon_indexer.indexing.records import MetadataText, RowRecord, SelectSpec, Tag


class FakeStorage:
    """
    In-memory Storage: tables are lists of row dicts keyed by table name.
    """

    def __init__(
        self,
        tables: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        metadata: Optional[Dict[Tuple[str, Any, str, str], List[MetadataText]]] = None,
        tags: Optional[Dict[Tuple[str, Any], List[str]]] = None,
        broken: Tuple[str, ...] = (),
    ) -> None:
        self.tables = tables or {}
        self.metadata = metadata or {}
        self.tags = tags or {}
        self.broken = set(broken)
        self.lookups: List[Tuple[str, Any]] = []

    def _rows(self, table: str) -> List[Dict[str, Any]]:
        if table in self.broken:
            raise StorageError(f"Failed to read {table}")
        return self.tables[table]

    def _record(self, table: str, row: Dict[str, Any]) -> RowRecord:
        return RowRecord(table, row, storage=self)

    async def table_exists(self, name: str) -> bool:
        return name in self.tables

    async def fetch_all(self, table: str, select: SelectSpec) -> List[RowRecord]:
        rows = [
            r for r in self._rows(table)
            if all(r.get(k) == v for k, v in select.filters.items())
        ]
        return [self._record(table, r) for r in rows]

    async def fetch_related(self, table: str, foreign_key_attribute: str, record_id: Any):
        return [
            self._record(table, r) for r in self._rows(table)
            if r.get(foreign_key_attribute) == record_id
        ]

    async def fetch_metadata(self, record_type, record_id, set_name, element_name):
        if "metadata" in self.broken:
            raise StorageError("Metadata store unavailable")
        return list(self.metadata.get((record_type, record_id, set_name, element_name), []))

    async def find_by_id(self, table: str, record_id: Any) -> Optional[RowRecord]:
        self.lookups.append((table, record_id))
        for row in self._rows(table):
            if row.get("id") == record_id:
                return self._record(table, row)
        return None

    async def fetch_tags(self, record_type: str, record_id: Any) -> List[Tag]:
        return [Tag(name=n) for n in self.tags.get((record_type, record_id), [])]


@pytest.fixture
def item_addon() -> AddonConfig:
    return AddonConfig(
        name="item",
        table="items",
        fields=(FieldConfig(name="description", is_html=True),),
        visibility=visibility_from(flag_attribute="public"),
        tagged=True,
        result_type="Item",
    )


@pytest.fixture
def exhibit_addons() -> List[AddonConfig]:
    exhibits = AddonConfig(
        name="exhibits",
        table="exhibits",
        fields=(FieldConfig(name="title"),),
        title_field_name="title",
        visibility=visibility_from(flag_attribute="public"),
        result_type="Exhibit",
    )
    pages = AddonConfig(
        name="exhibit_pages",
        table="exhibit_pages",
        fields=(
            FieldConfig(name="title"),
            FieldConfig(
                name="text",
                is_html=True,
                source=RemoteSource(table="exhibit_page_blocks", foreign_key_attribute="page_id"),
            ),
        ),
        title_field_name="title",
        visibility=visibility_from(
            parent_addon_name="exhibits", parent_key_attribute="exhibit_id"
        ),
        result_type="Exhibit Page",
    )
    return [exhibits, pages]


@pytest.fixture
def exhibit_registry(exhibit_addons) -> AddonRegistry:
    return AddonRegistry(exhibit_addons)


@pytest.fixture
def exhibit_storage() -> FakeStorage:
    return FakeStorage(
        tables={
            "exhibits": [
                {"id": 1, "title": "Open", "public": True},
                {"id": 2, "title": "Hidden", "public": False},
            ],
            "exhibit_pages": [
                {"id": 10, "title": "Intro", "exhibit_id": 1},
                {"id": 11, "title": "Secret", "exhibit_id": 2},
                {"id": 12, "title": "Orphan", "exhibit_id": 99},
            ],
            "exhibit_page_blocks": [
                {"id": 100, "page_id": 10, "text": "<p>First</p>"},
                {"id": 101, "page_id": 10, "text": "<em>Second</em>"},
                {"id": 102, "page_id": 11, "text": "Plain"},
            ],
        }
    )


@pytest.fixture
def dublin_core_field() -> FieldConfig:
    return FieldConfig(
        name="title",
        source=MetadataSource(set_name="Dublin Core", element_name="Title"),
    )
