"""
Plugin Loader

Handles reading/writing the host plugin state from `data/plugins_config.json`
and registering in-process plugins at application startup.

Each entry maps a plugin slug to its state, e.g.
    {"wp-all-import": {"installed": true, "enabled": false, "version": "3.7.3"}}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from meta_auditor.config import settings

if TYPE_CHECKING:
    from meta_auditor.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


# ── Config I/O ────────────────────────────────────────────────────────────────


def load_plugins_config(path: str | Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load plugin state from disk.

    Returns an empty mapping if the file does not exist or cannot be parsed.
    """
    config_file = Path(path or settings.plugins_config_file)
    if config_file.exists():
        try:
            return json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read plugins config: %s", exc)
    return {}


def save_plugins_config(config: dict[str, dict[str, Any]], path: str | Path | None = None) -> None:
    """Persist plugin state to disk."""
    config_file = Path(path or settings.plugins_config_file)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(
        json.dumps(config, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


# ── Startup initialisation ────────────────────────────────────────────────────


async def initialize_plugins(registry: PluginRegistry, path: str | Path | None = None) -> None:
    """
    Load and register the in-process plugins.

    Called from main.py lifespan(). The deferred import keeps plugin modules
    from importing the loader at module load time.
    """
    from meta_auditor.plugins.auditor_plugin import AuditorPlugin

    config = load_plugins_config(path)

    for plugin_class in [AuditorPlugin]:
        plugin = plugin_class()
        await plugin.on_load(config.get(plugin.meta.name, {}))
        registry.register(plugin)

    logger.info("Plugin initialisation complete: %d plugins registered", len(registry.all_plugins()))
