"""
Plugin Directory Client

Looks up plugin metadata in a WordPress.org-compatible plugin directory
(`/plugins/info/1.2/?action=plugin_information`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from meta_auditor.config import settings
from meta_auditor.exceptions import PluginInstallError, PluginNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class PluginInfo:
    """Directory entry for a plugin."""

    slug: str
    name: str
    version: str
    download_link: str


class PluginDirectory:
    """Async client for the plugin directory API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.plugin_directory_url
        self.timeout = timeout if timeout is not None else settings.plugin_directory_timeout
        self.transport = transport

    async def plugin_information(self, slug: str) -> PluginInfo:
        """
        Fetch the directory entry for ``slug``.

        Raises:
            PluginNotFoundError: the directory has no such plugin
            PluginInstallError: the directory could not be reached or
                answered with something unusable
        """
        params = {
            "action": "plugin_information",
            "request[slug]": slug,
            "request[fields][sections]": "0",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Plugin directory request failed for '{slug}': {e}")
            raise PluginInstallError("Plugin directory is unreachable", slug=slug) from e

        if response.status_code == 404:
            raise PluginNotFoundError(slug)
        if response.status_code != 200:
            logger.error(f"Plugin directory returned {response.status_code} for '{slug}'")
            raise PluginInstallError(f"Plugin directory returned HTTP {response.status_code}", slug=slug)

        try:
            data = response.json()
        except ValueError as e:
            raise PluginInstallError("Plugin directory returned invalid JSON", slug=slug) from e

        if not isinstance(data, dict) or data.get("error"):
            raise PluginNotFoundError(slug)
        if not data.get("download_link"):
            raise PluginInstallError("Plugin directory entry has no download link", slug=slug)

        return PluginInfo(
            slug=data.get("slug", slug),
            name=data.get("name", slug),
            version=str(data.get("version", "")),
            download_link=data["download_link"],
        )
