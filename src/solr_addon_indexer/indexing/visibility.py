"""
Visibility Resolver

Decides whether a record is public.

- A missing record is public (a dangling parent does not hide descendants).
- A flag attribute on the record decides directly, even when a parent chain
  is also configured.
- Otherwise visibility is inherited from the parent record.
- Without either, the record is public.

The parent chain is walked with an explicit loop. Each (addon, record id)
pair may be visited once; revisiting one means the chain loops.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Set, Tuple

from .records import Record, Storage
from ..addons.models import AddonConfig, DefaultPublic, FlagVisibility, ParentVisibility
from ..addons.registry import AddonRegistry
from ..core.errors import ConfigurationError

logger = logging.getLogger("solr.visibility")


class VisibilityResolver:
    def __init__(self, storage: Storage, registry: AddonRegistry) -> None:
        self._storage = storage
        self._registry = registry

    async def is_public(self, record: Optional[Record], addon: AddonConfig) -> bool:
        visited: Set[Tuple[str, Any]] = set()

        while record is not None:
            marker = (addon.name, record.get_id())
            if marker in visited:
                raise ConfigurationError(
                    f"Parent chain of addon '{addon.name}' loops back on "
                    f"record {record.get_id()!r}."
                )
            visited.add(marker)

            match addon.visibility:
                case FlagVisibility(attribute=attribute):
                    return bool(record.get_attribute(attribute))
                case ParentVisibility(key_attribute=key):
                    parent_addon = self._registry.resolve_parent(addon.name)
                    parent_id = record.get_attribute(key)
                    if parent_id is None:
                        return True
                    record = await self._storage.find_by_id(parent_addon.table, parent_id)
                    if record is None:
                        logger.debug(
                            "Parent %s %r not found; treating as public",
                            parent_addon.table, parent_id,
                        )
                    addon = parent_addon
                case DefaultPublic():
                    return True
                case other:
                    raise TypeError(f"Unsupported visibility source: {other!r}")

        return True
