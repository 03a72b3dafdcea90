"""
Addon Configuration Models

This module defines the declarative description of one indexable record
type (an "addon") and of each of its fields.

Field sourcing and visibility are modelled as tagged unions so that the
resolvers dispatch on the kind of source instead of checking which optional
attribute happens to be set:

    FieldSource      = LocalSource | RemoteSource | MetadataSource
    VisibilitySource = FlagVisibility | ParentVisibility | DefaultPublic

All models are frozen: a configuration never changes during an indexing run.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.errors import ConfigurationError


_FROZEN = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------
# Field Sources
# ---------------------------------------------------------------------

class LocalSource(BaseModel):
    """The value is an attribute of the record itself."""

    kind: Literal["local"] = "local"

    model_config = _FROZEN


class RemoteSource(BaseModel):
    """The values live in rows of another table pointing back at the record."""

    kind: Literal["remote"] = "remote"
    table: str = Field(..., min_length=1)
    foreign_key_attribute: str = Field(..., min_length=1)

    model_config = _FROZEN


class MetadataSource(BaseModel):
    """The values live in the element-text metadata store."""

    kind: Literal["metadata"] = "metadata"
    set_name: str = Field(..., min_length=1)
    element_name: str = Field(..., min_length=1)

    model_config = _FROZEN


FieldSource = Annotated[
    Union[LocalSource, RemoteSource, MetadataSource],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------
# Visibility Sources
# ---------------------------------------------------------------------

class FlagVisibility(BaseModel):
    """A boolean attribute on the record says whether it is public."""

    kind: Literal["flag"] = "flag"
    attribute: str = Field(..., min_length=1)

    model_config = _FROZEN


class ParentVisibility(BaseModel):
    """The record is public when its parent record is public."""

    kind: Literal["parent"] = "parent"
    addon_name: str = Field(..., min_length=1)
    key_attribute: str = Field(..., min_length=1)

    model_config = _FROZEN


class DefaultPublic(BaseModel):
    """Every record of the addon is public."""

    kind: Literal["default"] = "default"

    model_config = _FROZEN


VisibilitySource = Annotated[
    Union[FlagVisibility, ParentVisibility, DefaultPublic],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------
# Configuration Models
# ---------------------------------------------------------------------

class FieldConfig(BaseModel):
    """One indexed field of an addon."""

    name: str = Field(..., min_length=1)
    is_html: bool = False
    source: FieldSource = Field(default_factory=LocalSource)

    model_config = _FROZEN


class AddonConfig(BaseModel):
    """
    One record type to index.

    The addon name namespaces the Solr field names produced for its fields,
    the table is where its records are stored.
    """

    name: str = Field(..., min_length=1)
    table: str = Field(..., min_length=1)
    fields: Tuple[FieldConfig, ...] = ()
    title_field_name: Optional[str] = None
    visibility: VisibilitySource = Field(default_factory=DefaultPublic)
    tagged: bool = False
    result_type: Optional[str] = None

    model_config = _FROZEN

    @model_validator(mode="after")
    def _check_fields(self) -> "AddonConfig":
        names = [f.name for f in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Addon '{self.name}' declares a field twice.")

        if self.title_field_name is not None and self.title_field_name not in names:
            raise ValueError(
                f"Addon '{self.name}' has title field "
                f"'{self.title_field_name}' which is not one of its fields."
            )
        return self

    @property
    def title_field(self) -> Optional[FieldConfig]:
        for field in self.fields:
            if field.name == self.title_field_name:
                return field
        return None

    @property
    def parent_name(self) -> Optional[str]:
        if isinstance(self.visibility, ParentVisibility):
            return self.visibility.addon_name
        return None


# ---------------------------------------------------------------------
# Constructors from optional attributes
# ---------------------------------------------------------------------

def field_source_from(
    remote: Optional[Tuple[str, str]] = None,
    metadata: Optional[Sequence[str]] = None,
) -> LocalSource | RemoteSource | MetadataSource:
    """
    Build a field source from a remote ``(table, key)`` pair and/or a
    metadata ``(set, element)`` pair. At most one may be given.
    """
    if remote is not None and metadata is not None:
        raise ConfigurationError(
            "A field cannot be both remote and metadata-backed."
        )

    if remote is not None:
        table, key = remote
        return RemoteSource(table=table, foreign_key_attribute=key)

    if metadata is not None:
        if len(metadata) != 2:
            raise ConfigurationError(
                f"Metadata reference must be [set, element], got {list(metadata)!r}."
            )
        set_name, element_name = metadata
        return MetadataSource(set_name=set_name, element_name=element_name)

    return LocalSource()


def visibility_from(
    flag_attribute: Optional[str] = None,
    parent_addon_name: Optional[str] = None,
    parent_key_attribute: Optional[str] = None,
) -> FlagVisibility | ParentVisibility | DefaultPublic:
    """
    Build a visibility source. A flag takes precedence over a parent chain.
    """
    if flag_attribute:
        return FlagVisibility(attribute=flag_attribute)

    if parent_addon_name:
        if not parent_key_attribute:
            raise ConfigurationError(
                f"Parent addon '{parent_addon_name}' given without a parent key."
            )
        return ParentVisibility(
            addon_name=parent_addon_name,
            key_attribute=parent_key_attribute,
        )

    return DefaultPublic()
