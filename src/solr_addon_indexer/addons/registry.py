"""
Addon Registry

Ordered, validated mapping of addon name to AddonConfig.

Validation happens once, at construction, so that an indexing run never
starts with a configuration that references unknown parents or whose parent
chain loops back on itself.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from .models import AddonConfig
from ..core.errors import ConfigurationError


class AddonRegistry:
    """
    The configured addons, in definition order.
    """

    def __init__(self, addons: Iterable[AddonConfig]) -> None:
        self._addons: Dict[str, AddonConfig] = {}

        for addon in addons:
            if addon.name in self._addons:
                raise ConfigurationError(f"Duplicate addon name '{addon.name}'.")
            self._addons[addon.name] = addon

        self._validate_parents()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_parents(self) -> None:
        for addon in self._addons.values():
            parent = addon.parent_name
            if parent is not None and parent not in self._addons:
                raise ConfigurationError(
                    f"Addon '{addon.name}' refers to unknown parent '{parent}'."
                )

        for addon in self._addons.values():
            seen: List[str] = [addon.name]
            parent = addon.parent_name

            while parent is not None:
                if parent in seen:
                    chain = " -> ".join(seen + [parent])
                    raise ConfigurationError(f"Cyclic parent chain: {chain}.")
                seen.append(parent)
                parent = self._addons[parent].parent_name

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, name: str) -> Optional[AddonConfig]:
        return self._addons.get(name)

    def __getitem__(self, name: str) -> AddonConfig:
        try:
            return self._addons[name]
        except KeyError:
            raise ConfigurationError(f"Unknown addon '{name}'.") from None

    def __contains__(self, name: object) -> bool:
        return name in self._addons

    def __iter__(self) -> Iterator[AddonConfig]:
        return iter(self._addons.values())

    def __len__(self) -> int:
        return len(self._addons)

    def names(self) -> List[str]:
        return list(self._addons)

    def resolve_parent(self, addon_name: str) -> AddonConfig:
        """
        Return the configuration of the named addon's parent.

        Raises
        ------
        ConfigurationError
            If the addon is unknown or does not inherit its visibility.
        """
        addon = self[addon_name]
        parent = addon.parent_name
        if parent is None:
            raise ConfigurationError(f"Addon '{addon_name}' has no parent addon.")
        return self[parent]
