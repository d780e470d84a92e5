"""
Plugin Registry

Plugins loaded into this process, keyed by slug. Being loaded is what makes
a plugin active, so the plugin manager consults this before the stored
plugin state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meta_auditor.plugins.base import PluginBase

logger = logging.getLogger(__name__)


class PluginRegistry:
    def __init__(self) -> None:
        self._loaded: dict[str, PluginBase] = {}

    def register(self, plugin: PluginBase) -> None:
        slug = plugin.meta.name
        if slug in self._loaded:
            logger.warning("Plugin %s loaded twice; keeping the newer instance", slug)
        self._loaded[slug] = plugin
        logger.info("Plugin loaded: %s %s", slug, plugin.meta.version)

    def get(self, slug: str) -> PluginBase | None:
        return self._loaded.get(slug)

    def all_plugins(self) -> list[PluginBase]:
        """Loaded plugins in load order."""
        return list(self._loaded.values())

    def is_registered(self, slug: str) -> bool:
        return slug in self._loaded

    def __iter__(self) -> Iterator[PluginBase]:
        return iter(self.all_plugins())

    def __len__(self) -> int:
        return len(self._loaded)


plugin_registry = PluginRegistry()
