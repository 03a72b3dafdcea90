"""
Addon Definition Loader

Parses the JSON addon definition files into a validated AddonRegistry.

File Format
-----------
Each file holds an object mapping addon names to definitions:

    {
        "exhibits": {
            "table": "exhibits",
            "result_type": "Exhibit",
            "tagged": true,
            "flag": "public",
            "fields": [
                {"field": "title", "is_title": true},
                {"field": "description", "is_html": true}
            ],
            "children": {
                "exhibit_pages": {
                    "table": "exhibit_pages",
                    "parent_key": "exhibit_id",
                    "fields": [
                        "title",
                        {"field": "text", "is_html": true,
                         "remote": {"table": "exhibit_page_blocks", "key": "page_id"}}
                    ]
                }
            }
        }
    }

A field is either a bare column name or an object. A child addon inherits
its visibility from the enclosing addon through ``parent_key`` unless it
declares its own ``flag``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import AddonConfig, FieldConfig, field_source_from, visibility_from
from .registry import AddonRegistry
from ..core.errors import ConfigurationError

logger = logging.getLogger("solr.addons")


# ---------------------------------------------------------------------
# Raw Definition Schema
# ---------------------------------------------------------------------

class _RemoteDefinition(BaseModel):
    table: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")


class _FieldDefinition(BaseModel):
    field: str = Field(..., min_length=1)
    is_html: bool = False
    is_title: bool = False
    # Display label, only consumed by the facet UI
    label: Optional[str] = None
    remote: Optional[_RemoteDefinition] = None
    metadata: Optional[List[str]] = None

    model_config = ConfigDict(extra="forbid")


class _AddonDefinition(BaseModel):
    table: str = Field(..., min_length=1)
    result_type: Optional[str] = None
    tagged: bool = False
    flag: Optional[str] = None
    parent_key: Optional[str] = None
    title: Optional[str] = None
    fields: List[Union[str, _FieldDefinition]] = Field(default_factory=list)
    children: Dict[str, "_AddonDefinition"] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


_AddonDefinition.model_rebuild()


# ---------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------

def _build_field(raw: Union[str, _FieldDefinition]) -> FieldConfig:
    if isinstance(raw, str):
        return FieldConfig(name=raw)

    remote = (raw.remote.table, raw.remote.key) if raw.remote else None
    try:
        source = field_source_from(remote=remote, metadata=raw.metadata)
    except ConfigurationError as exc:
        raise ConfigurationError(f"Field '{raw.field}': {exc}") from exc

    return FieldConfig(name=raw.field, is_html=raw.is_html, source=source)


def _title_field_name(name: str, raw: _AddonDefinition) -> Optional[str]:
    flagged = [
        f.field for f in raw.fields
        if isinstance(f, _FieldDefinition) and f.is_title
    ]
    if len(flagged) > 1:
        raise ConfigurationError(f"Addon '{name}' marks more than one title field.")

    if raw.title and flagged and raw.title != flagged[0]:
        raise ConfigurationError(
            f"Addon '{name}' names title field '{raw.title}' but marks '{flagged[0]}'."
        )

    return raw.title or (flagged[0] if flagged else None)


def _flatten(
    name: str,
    raw: _AddonDefinition,
    parent: Optional[str],
    out: List[AddonConfig],
) -> None:
    if raw.parent_key and parent is None:
        raise ConfigurationError(
            f"Addon '{name}' declares parent_key '{raw.parent_key}' "
            "but is not nested under a parent addon."
        )

    visibility = visibility_from(
        flag_attribute=raw.flag,
        parent_addon_name=parent if raw.parent_key else None,
        parent_key_attribute=raw.parent_key,
    )

    try:
        addon = AddonConfig(
            name=name,
            table=raw.table,
            fields=tuple(_build_field(f) for f in raw.fields),
            title_field_name=_title_field_name(name, raw),
            visibility=visibility,
            tagged=raw.tagged,
            result_type=raw.result_type,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid addon '{name}': {exc}") from exc

    out.append(addon)

    for child_name, child in raw.children.items():
        _flatten(child_name, child, name, out)


def parse_addons(data: Mapping[str, Any]) -> List[AddonConfig]:
    """
    Convert one parsed definition document into AddonConfigs.

    Parents precede their children in the returned list.
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError("Addon definitions must be a JSON object.")

    addons: List[AddonConfig] = []
    for name, raw in data.items():
        try:
            definition = _AddonDefinition.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid addon '{name}': {exc}") from exc
        _flatten(name, definition, None, addons)

    return addons


def _definition_files(path: Path) -> List[Path]:
    if path.is_dir():
        return sorted(path.glob("*.json"))
    return [path]


def load_addons(paths: Union[str, Path, Iterable[Union[str, Path]]]) -> AddonRegistry:
    """
    Load addon definitions from JSON files or directories of JSON files.

    Parameters
    ----------
    paths : str | Path | Iterable[str | Path]
        A definition file, a directory (read in filename order), or several
        of either.

    Returns
    -------
    AddonRegistry
        The validated registry.

    Raises
    ------
    ConfigurationError
        If a file cannot be read or parsed, or the definitions are invalid.
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]

    addons: List[AddonConfig] = []

    for root in paths:
        for file in _definition_files(Path(root)):
            try:
                with file.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as exc:
                raise ConfigurationError(
                    f"Cannot read addon definitions from {file}: {exc}"
                ) from exc

            parsed = parse_addons(data)
            logger.debug("Loaded %d addon(s) from %s", len(parsed), file)
            addons.extend(parsed)

    registry = AddonRegistry(addons)
    logger.info("Configured addons: %s", ", ".join(registry.names()) or "(none)")
    return registry
