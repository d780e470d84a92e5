"""
Host Plugin System

Public API for the plugin system:
    PluginMeta      : plugin metadata dataclass
    PluginBase      : abstract base class for in-process plugins
    PluginRegistry  : registry of loaded plugins
    plugin_registry : global singleton registry instance
    PluginDirectory : plugin directory API client
    PluginManager   : installs plugins and reports their state
"""

from .base import PluginBase, PluginMeta
from .directory import PluginDirectory, PluginInfo
from .manager import PluginManager
from .registry import PluginRegistry, plugin_registry

__all__ = [
    "PluginBase",
    "PluginMeta",
    "PluginRegistry",
    "plugin_registry",
    "PluginDirectory",
    "PluginInfo",
    "PluginManager",
]
