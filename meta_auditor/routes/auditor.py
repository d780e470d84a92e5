"""
SEO Meta Auditor Routes

GET /admin/seo-meta-auditor             → report page (filters, table, pagination)
GET /admin/seo-meta-auditor/export.csv  → CSV of the full filtered/sorted report
GET /api/v1/seo-audit                   → same report as paginated JSON

All routes require the manage_options capability. Every request re-reads
the host store; the only state written is the post type selection.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from meta_auditor.auth import require_capability
from meta_auditor.config import settings
from meta_auditor.constants import Capability
from meta_auditor.database import get_db
from meta_auditor.dependencies import get_nonce_manager, get_plugin_manager, get_settings_store
from meta_auditor.models.user import User
from meta_auditor.plugins.manager import PluginManager
from meta_auditor.rendering import templates
from meta_auditor.schemas.audit import PER_PAGE_CHOICES, AuditQuery, SortKey
from meta_auditor.services.audit_service import (
    AuditReport,
    AuditService,
    clean,
    is_complete,
    sort_indicator,
)
from meta_auditor.services.content_store import ContentStore
from meta_auditor.services.export_service import EXPORT_FILENAME, export_service
from meta_auditor.services.settings_store import PostTypePreference, SettingsStore
from meta_auditor.utils.pagination import PaginatedResponse, build_url, page_links
from meta_auditor.utils.security import NonceManager

router = APIRouter(tags=["SEO Meta Auditor"])
logger = logging.getLogger(__name__)

REPORT_PATH = "/admin/seo-meta-auditor"
EXPORT_PATH = f"{REPORT_PATH}/export.csv"
INSTALL_PATH = f"{REPORT_PATH}/install-importer"
INSTALL_ACTION = "install_importer"

COLUMNS: list[tuple[SortKey, str]] = [
    (SortKey.ID, "ID"),
    (SortKey.TITLE, "Title"),
    (SortKey.TYPE, "Type"),
    (SortKey.META_TITLE, "Meta Title"),
    (SortKey.META_DESC, "Meta Description"),
    (SortKey.FOCUS_KW, "Keyphrase"),
    (SortKey.MODIFIED, "Modified"),
]


# ── Helpers ────────────────────────────────────────────────────────────────────


async def run_report(request: Request, db: AsyncSession, store: SettingsStore) -> AuditReport:
    query = AuditQuery.from_query_params(request.query_params)
    service = AuditService(ContentStore(db), PostTypePreference(store, settings.default_post_types))
    return await service.run(query)


def _header_cells(report: AuditReport) -> list[dict[str, str]]:
    return [
        {
            "label": label,
            "url": build_url(REPORT_PATH, report.sort_params(key)),
            "indicator": sort_indicator(report.query, key),
        }
        for key, label in COLUMNS
    ]


def _display_rows(report: AuditReport) -> list[dict[str, Any]]:
    # Values are decoded here and escaped again by the template
    return [
        {
            "id": r.id,
            "title": clean(r.title),
            "type": r.type,
            "meta_title": clean(r.meta_title),
            "meta_desc": clean(r.meta_desc),
            "focus_kw": clean(r.focus_kw),
            "modified": r.modified,
            "complete": is_complete(r),
        }
        for r in report.page.items
    ]


# ── Routes ─────────────────────────────────────────────────────────────────────


@router.get(REPORT_PATH, response_class=HTMLResponse)
async def audit_page(
    request: Request,
    current_user: User = Depends(require_capability(Capability.MANAGE_OPTIONS)),
    db: AsyncSession = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
    plugin_manager: PluginManager = Depends(get_plugin_manager),
    nonces: NonceManager = Depends(get_nonce_manager),
):
    """Render the audit report for the current filters."""
    report = await run_report(request, db, store)
    post_types = await ContentStore(db).list_post_types()

    importer_active = plugin_manager.is_active(settings.importer_slug)
    install_url = None
    if not importer_active:
        install_url = build_url(INSTALL_PATH, {"_nonce": nonces.create(INSTALL_ACTION, current_user.id)})

    context = {
        "app_name": settings.app_name,
        "report_path": REPORT_PATH,
        "query": report.query,
        "selected_types": report.post_types,
        "post_types": post_types,
        "per_page_choices": PER_PAGE_CHOICES,
        "headers": _header_cells(report),
        "rows": _display_rows(report),
        "page": report.page,
        "page_links": page_links(report.page.total_pages, report.page.page, REPORT_PATH, report.page_params()),
        "export_url": build_url(EXPORT_PATH, report.page_params()),
        "payload": export_service.build_json_payload(report.records),
        "importer_name": settings.importer_name,
        "importer_active": importer_active,
        "install_url": install_url,
        "new_import_url": settings.importer_new_import_url,
        "importer_installed": request.query_params.get("importer_installed") == "1",
    }
    return templates.TemplateResponse(request, "auditor.html", context)


@router.get(EXPORT_PATH)
async def export_csv(
    request: Request,
    _current_user: User = Depends(require_capability(Capability.MANAGE_OPTIONS)),
    db: AsyncSession = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
):
    """
    Export the report as CSV.

    Takes the same parameters as the report page; pagination parameters are
    ignored so the file always holds every matching record.
    """
    report = await run_report(request, db, store)
    csv_data = export_service.build_csv(report.records)

    return Response(
        content=csv_data.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@router.get("/api/v1/seo-audit")
async def audit_api(
    request: Request,
    _current_user: User = Depends(require_capability(Capability.MANAGE_OPTIONS)),
    db: AsyncSession = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
) -> dict[str, Any]:
    """Return one page of the report as JSON."""
    report = await run_report(request, db, store)
    page = report.page
    body = PaginatedResponse(
        items=[{**r.model_dump(), "complete": is_complete(r)} for r in page.items],
        total=page.total,
        page=page.page,
        per_page=page.per_page,
        total_pages=page.total_pages,
        has_next=page.has_next,
        has_previous=page.has_previous,
    )
    return {**body.model_dump(), "post_types": report.post_types}
