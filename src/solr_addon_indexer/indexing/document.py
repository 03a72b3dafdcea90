"""
Solr Document

The flattened representation of one record submitted to Solr: a mapping of
field name to a single value or a list of values.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional


class SolrDocument:
    """
    A Solr input document.

    ``set_field`` stores a single value, replacing any previous one.
    ``add_field`` appends, turning the field into a multi-valued list.
    """

    def __init__(self) -> None:
        self._fields: Dict[str, Any] = {}

    @property
    def id(self) -> Optional[str]:
        return self._fields.get("id")

    @id.setter
    def id(self, value: str) -> None:
        self._fields["id"] = value

    def set_field(self, name: str, value: Any) -> None:
        self._fields[name] = value

    def add_field(self, name: str, value: Any) -> None:
        current = self._fields.get(name)
        if current is None:
            self._fields[name] = [value]
        elif isinstance(current, list):
            current.append(value)
        else:
            self._fields[name] = [current, value]

    def get_values(self, name: str) -> List[Any]:
        """Return the field's values as a list (empty when unset)."""
        value = self._fields.get(name)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def as_dict(self) -> Dict[str, Any]:
        return {
            k: list(v) if isinstance(v, list) else v
            for k, v in self._fields.items()
        }

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SolrDocument):
            return self._fields == other._fields
        if isinstance(other, dict):
            return self._fields == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"SolrDocument({self._fields!r})"
