"""
Addon Configuration Package

Declarative descriptions of the record types to index, their registry,
and the JSON definition loader.
"""

from .models import (
    AddonConfig,
    FieldConfig,
    LocalSource,
    RemoteSource,
    MetadataSource,
    FlagVisibility,
    ParentVisibility,
    DefaultPublic,
    field_source_from,
    visibility_from,
)
from .registry import AddonRegistry
from .loader import load_addons, parse_addons

__all__ = [
    "AddonConfig",
    "FieldConfig",
    "LocalSource",
    "RemoteSource",
    "MetadataSource",
    "FlagVisibility",
    "ParentVisibility",
    "DefaultPublic",
    "field_source_from",
    "visibility_from",
    "AddonRegistry",
    "load_addons",
    "parse_addons",
]
