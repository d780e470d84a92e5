"""
Plugin Manager

The host's install mechanism: downloads a plugin package named by the
plugin directory, unpacks it into the plugins directory and records the
installation in the plugin config. Installed plugins start disabled;
enabling them is left to the host admin.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path

import httpx

from meta_auditor.config import settings
from meta_auditor.exceptions import PluginInstallError
from meta_auditor.plugins.directory import PluginInfo
from meta_auditor.plugins.loader import load_plugins_config, save_plugins_config
from meta_auditor.plugins.registry import PluginRegistry, plugin_registry
from meta_auditor.utils.security import validate_file_path

logger = logging.getLogger(__name__)


class PluginManager:
    """Install and inspect host plugins."""

    def __init__(
        self,
        registry: PluginRegistry | None = None,
        config_path: str | Path | None = None,
        plugins_dir: str | Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self.registry = registry if registry is not None else plugin_registry
        self.config_path = Path(config_path or settings.plugins_config_file)
        self.plugins_dir = Path(plugins_dir or settings.plugins_dir)
        self.transport = transport
        self.timeout = timeout if timeout is not None else settings.plugin_directory_timeout

    def is_installed(self, slug: str) -> bool:
        return bool(load_plugins_config(self.config_path).get(slug, {}).get("installed"))

    def is_active(self, slug: str) -> bool:
        """A plugin is active when it is loaded in-process or enabled in the config."""
        if self.registry.is_registered(slug):
            return True
        return load_plugins_config(self.config_path).get(slug, {}).get("enabled") is True

    async def _download(self, info: PluginInfo) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport, follow_redirects=True
            ) as client:
                response = await client.get(info.download_link)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Download of plugin '{info.slug}' failed: {e}")
            raise PluginInstallError("Plugin package download failed", slug=info.slug) from e
        return response.content

    def _extract(self, info: PluginInfo, archive: bytes) -> None:
        try:
            with zipfile.ZipFile(io.BytesIO(archive)) as package:
                for member in package.infolist():
                    validate_file_path(member.filename, self.plugins_dir)
                self.plugins_dir.mkdir(parents=True, exist_ok=True)
                package.extractall(self.plugins_dir)
        except zipfile.BadZipFile as e:
            raise PluginInstallError("Plugin package is not a zip archive", slug=info.slug) from e
        except ValueError as e:
            raise PluginInstallError("Plugin package contains unsafe paths", slug=info.slug) from e

    async def install(self, info: PluginInfo) -> None:
        """
        Download, unpack and record a plugin.

        Nothing is written to the plugin config unless the package was
        downloaded and unpacked successfully.
        """
        logger.info(f"Installing plugin '{info.slug}' {info.version}")

        archive = await self._download(info)
        self._extract(info, archive)

        config = load_plugins_config(self.config_path)
        entry = config.get(info.slug, {})
        entry.update(
            {
                "installed": True,
                "enabled": entry.get("enabled", False),
                "name": info.name,
                "version": info.version,
            }
        )
        config[info.slug] = entry
        save_plugins_config(config, self.config_path)

        logger.info(f"Plugin '{info.slug}' installed into {self.plugins_dir}")
