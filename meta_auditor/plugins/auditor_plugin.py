"""
SEO Meta Auditor Plugin

Registers the auditor itself with the host plugin registry so the host
lists it next to the other loaded plugins.
"""

from __future__ import annotations

import logging
from typing import Any

from meta_auditor.plugins.base import PluginBase, PluginMeta

logger = logging.getLogger(__name__)

_META = PluginMeta(
    name="seo-meta-auditor",
    version="0.6.0",
    description=(
        "Audit SEO meta fields with filters, sorting, pagination, CSV export "
        "and a one-click import plugin helper"
    ),
    config_schema={
        "post_types": {"type": "array", "items": {"type": "string"}, "default": ["page"]},
    },
)


class AuditorPlugin(PluginBase):
    """The auditor's own entry in the plugin registry."""

    @property
    def meta(self) -> PluginMeta:
        return _META

    async def on_load(self, config: dict[str, Any]) -> None:
        self._config = config
        logger.debug("AuditorPlugin loaded (config keys=%s)", sorted(config))
