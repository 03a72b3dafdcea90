"""
Record and Storage Contracts

The indexing pipeline only sees records and storage through the narrow
interfaces defined here:

- Record   : attribute access by name, identifier, tag listing
- Storage  : table introspection, row fetching, related rows, metadata
- RowRecord: the mapping-backed Record produced by storage implementations
"""

from __future__ import annotations

from typing import (
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------

class Tag(BaseModel):
    """A free-form tag attached to a record."""

    name: str

    model_config = ConfigDict(frozen=True)


class MetadataText(BaseModel):
    """One element-text entry from the metadata store."""

    text: str
    html: bool = False

    model_config = ConfigDict(frozen=True)


class SelectSpec(BaseModel):
    """
    Which rows of a table to fetch for indexing.

    ``filters`` are equality conditions on columns, ``order_by`` lists the
    columns rows are sorted by.
    """

    filters: Dict[str, Any] = Field(default_factory=dict)
    order_by: Tuple[str, ...] = ("id",)

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------

@runtime_checkable
class Record(Protocol):
    def get_id(self) -> Any: ...

    def get_attribute(self, name: str) -> Any: ...

    def __getitem__(self, name: str) -> Any: ...

    async def get_tags(self) -> Sequence[Tag]: ...


class Storage(Protocol):
    async def table_exists(self, name: str) -> bool: ...

    async def fetch_all(self, table: str, select: SelectSpec) -> List[Record]: ...

    async def fetch_related(
        self, table: str, foreign_key_attribute: str, record_id: Any
    ) -> List[Record]: ...

    async def fetch_metadata(
        self, record_type: str, record_id: Any, set_name: str, element_name: str
    ) -> List[MetadataText]: ...

    async def find_by_id(self, table: str, record_id: Any) -> Optional[Record]: ...

    async def fetch_tags(self, record_type: str, record_id: Any) -> List[Tag]: ...


# ---------------------------------------------------------------------
# Mapping-backed Record
# ---------------------------------------------------------------------

class RowRecord:
    """
    A record backed by a column → value mapping.

    Tags are either supplied up front or looked up through the storage the
    row came from.
    """

    def __init__(
        self,
        table: str,
        values: Mapping[str, Any],
        storage: Optional[Storage] = None,
        tags: Optional[Sequence[Tag]] = None,
    ) -> None:
        self.table = table
        self._values = dict(values)
        self._storage = storage
        self._tags = list(tags) if tags is not None else None

    def get_id(self) -> Any:
        return self._values.get("id")

    @property
    def id(self) -> Any:
        return self.get_id()

    def get_attribute(self, name: str) -> Any:
        return self._values.get(name)

    def __getitem__(self, name: str) -> Any:
        return self._values.get(name)

    async def get_tags(self) -> Sequence[Tag]:
        if self._tags is not None:
            return self._tags
        if self._storage is None:
            return []
        return await self._storage.fetch_tags(self.table, self.get_id())

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"RowRecord({self.table!r}, id={self.get_id()!r})"
