"""
FastAPI dependencies for the auditor's collaborators.

Each collaborator is resolved per request so tests can swap it through
``app.dependency_overrides``.
"""

from fastapi import Request

from meta_auditor.config import settings
from meta_auditor.plugins.directory import PluginDirectory
from meta_auditor.plugins.manager import PluginManager
from meta_auditor.services.settings_store import JsonFileSettingsStore, SettingsStore
from meta_auditor.utils.security import NonceManager


def get_settings_store() -> SettingsStore:
    return JsonFileSettingsStore(settings.settings_file)


def get_nonce_manager(request: Request) -> NonceManager:
    return request.app.state.nonce_manager


def get_plugin_directory() -> PluginDirectory:
    return PluginDirectory()


def get_plugin_manager() -> PluginManager:
    return PluginManager()
