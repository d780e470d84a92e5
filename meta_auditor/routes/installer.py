"""
Import Plugin Installer Route

GET|POST /admin/seo-meta-auditor/install-importer?_nonce=...

Requires the install_plugins capability and a valid single-use nonce for
the install_importer action. A caller failing either check gets a
"Permission denied." page; nothing is looked up, downloaded or recorded.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from meta_auditor.auth import require_capability
from meta_auditor.config import settings
from meta_auditor.constants import Capability
from meta_auditor.dependencies import get_nonce_manager, get_plugin_directory, get_plugin_manager
from meta_auditor.exceptions import CSRFError
from meta_auditor.models.user import User
from meta_auditor.plugins.directory import PluginDirectory
from meta_auditor.plugins.manager import PluginManager
from meta_auditor.routes.auditor import INSTALL_ACTION, INSTALL_PATH, REPORT_PATH
from meta_auditor.utils.pagination import build_url
from meta_auditor.utils.security import NonceManager

router = APIRouter(tags=["SEO Meta Auditor"])
logger = logging.getLogger(__name__)


async def _submitted_nonce(request: Request) -> str | None:
    token = request.query_params.get("_nonce")
    if token or request.method != "POST":
        return token
    form = await request.form()
    value = form.get("_nonce")
    return value if isinstance(value, str) else None


@router.api_route(INSTALL_PATH, methods=["GET", "POST"])
async def install_importer(
    request: Request,
    current_user: User = Depends(require_capability(Capability.INSTALL_PLUGINS)),
    nonces: NonceManager = Depends(get_nonce_manager),
    directory: PluginDirectory = Depends(get_plugin_directory),
    plugin_manager: PluginManager = Depends(get_plugin_manager),
) -> RedirectResponse:
    """Install the import plugin, then return to the report."""
    token = await _submitted_nonce(request)
    if not nonces.verify(token, INSTALL_ACTION, current_user.id):
        logger.warning(f"Installer nonce rejected for user {current_user.id}")
        raise CSRFError()

    info = await directory.plugin_information(settings.importer_slug)
    await plugin_manager.install(info)

    return RedirectResponse(build_url(REPORT_PATH, {"importer_installed": 1}), status_code=303)
