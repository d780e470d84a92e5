"""
Plugin Base Classes

PluginMeta describes a plugin as the host lists it; PluginBase is what an
in-process plugin implements to be loaded at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class PluginMeta:
    """
    Host-facing description of a plugin.

    Attributes:
        name:          Slug the host stores plugin state under, e.g. "seo-meta-auditor".
        version:       Version string shown in the plugin list.
        description:   One-line summary for the admin UI.
        author:        Plugin author.
        config_schema: JSON Schema fragments for the plugin's stored options.
    """

    name: str
    version: str
    description: str
    author: str = "CMS Core Team"
    config_schema: dict[str, Any] = field(default_factory=dict)


class PluginBase(ABC):
    """An in-process plugin. Subclasses provide ``meta``."""

    @property
    @abstractmethod
    def meta(self) -> PluginMeta: ...

    async def on_load(self, config: dict[str, Any]) -> None:  # noqa: B027
        """Receive the plugin's stored state once, before registration."""
