"""
Audit Service

Filter, search, sort and paginate content records for the SEO meta report.

The report is computed from scratch on every request:
    resolve post types -> fetch -> filter/search -> sort -> paginate
The full filtered and sorted list is kept alongside the page so the CSV
export and the table always describe the same set.
"""

import html
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from meta_auditor.schemas.audit import AuditQuery, ContentRecord, SortKey, SortOrder
from meta_auditor.services.content_store import ContentStore
from meta_auditor.services.settings_store import PostTypePreference
from meta_auditor.utils.pagination import Page, paginate

logger = logging.getLogger(__name__)

# Default inserted by the SEO plugin when a title template is left unset
PLACEHOLDER_TITLE = "%%sitename%%"

SORT_ASC_GLYPH = "▲"
SORT_DESC_GLYPH = "▼"

# Decimal numbers as the host compares them, e.g. "10", "-2.5", "1e3"
NUMERIC_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def clean(value: str) -> str:
    """Decode HTML entities (named, numeric and quotes) in a stored value."""
    return html.unescape(value or "")


def is_missing_title(record: ContentRecord) -> bool:
    meta_title = clean(record.meta_title)
    return meta_title == "" or meta_title == PLACEHOLDER_TITLE


def is_missing_desc(record: ContentRecord) -> bool:
    return clean(record.meta_desc) == ""


def is_missing_kw(record: ContentRecord) -> bool:
    return clean(record.focus_kw) == ""


def is_complete(record: ContentRecord) -> bool:
    """True when title, description and keyword are all filled in."""
    return not (is_missing_title(record) or is_missing_desc(record) or is_missing_kw(record))


def matches_search(record: ContentRecord, search: str) -> bool:
    """
    Case-insensitive substring match against the raw title or any cleaned
    metadata field. An empty search matches everything.
    """
    if search == "":
        return True
    needle = search.lower()
    haystacks = (record.title, clean(record.meta_title), clean(record.meta_desc), clean(record.focus_kw))
    return any(needle in value.lower() for value in haystacks)


def matches_filters(record: ContentRecord, query: AuditQuery) -> bool:
    if query.missing_title and not is_missing_title(record):
        return False
    if query.missing_desc and not is_missing_desc(record):
        return False
    if query.missing_kw and not is_missing_kw(record):
        return False
    return matches_search(record, query.search)


def filter_records(records: Iterable[ContentRecord], query: AuditQuery) -> list[ContentRecord]:
    """Keep the records passing every enabled toggle and the search, in order."""
    return [r for r in records if matches_filters(r, query)]


def _sort_value(value: Any) -> tuple:
    # Numeric strings compare as numbers and order before text
    text = str(value).strip()
    if NUMERIC_RE.fullmatch(text):
        return (0, float(text), "")
    return (1, 0.0, text.lower())


def sort_records(records: list[ContentRecord], key: SortKey | None, order: SortOrder) -> list[ContentRecord]:
    """
    Sort by a field, numerically when both values are numbers and by the
    lower-cased string form otherwise.

    The sort is stable in both directions: equal values keep their input
    order. ``key=None`` returns the records unchanged.
    """
    if key is None:
        return list(records)
    return sorted(
        records,
        key=lambda r: _sort_value(getattr(r, key.value)),
        reverse=order == SortOrder.DESC,
    )


def next_order(query: AuditQuery, column: SortKey) -> SortOrder:
    """Direction a header link should request: flip the active column, else asc."""
    if query.sort == column and query.order == SortOrder.ASC:
        return SortOrder.DESC
    return SortOrder.ASC


def sort_indicator(query: AuditQuery, column: SortKey) -> str:
    if query.sort != column:
        return ""
    return SORT_ASC_GLYPH if query.order == SortOrder.ASC else SORT_DESC_GLYPH


@dataclass
class AuditReport:
    """Result of one report run."""

    query: AuditQuery
    post_types: list[str]
    records: list[ContentRecord]
    page: Page[ContentRecord]

    def base_params(self) -> dict[str, Any]:
        """Link parameters preserving the active filters and type selection."""
        params: dict[str, Any] = {
            "search": self.query.search,
            "per_page": self.query.per_page,
            "missing_title": 1 if self.query.missing_title else None,
            "missing_desc": 1 if self.query.missing_desc else None,
            "missing_kw": 1 if self.query.missing_kw else None,
            "post_types": self.post_types,
        }
        return {k: v for k, v in params.items() if v not in (None, "", [])}

    def sort_params(self, column: SortKey) -> dict[str, Any]:
        """Parameters for a column header link."""
        return {
            **self.base_params(),
            "sort": column.value,
            "order": next_order(self.query, column).value,
        }

    def page_params(self) -> dict[str, Any]:
        """Parameters for pagination links: filters plus the current sort."""
        params = self.base_params()
        if self.query.sort is not None:
            params["sort"] = self.query.sort.value
        params["order"] = self.query.order.value
        return params


class AuditService:
    """Runs the report pipeline against the host store."""

    def __init__(self, content_store: ContentStore, preference: PostTypePreference):
        self.content_store = content_store
        self.preference = preference

    async def run(self, query: AuditQuery) -> AuditReport:
        post_types = self.preference.resolve(query)
        records = await self.content_store.fetch_records(post_types)
        filtered = filter_records(records, query)
        ordered = sort_records(filtered, query.sort, query.order)
        page = paginate(ordered, query.page, query.per_page)

        logger.info(
            f"Audit report: {len(records)} fetched, {page.total} matched, "
            f"page {page.page}/{page.total_pages}"
        )
        return AuditReport(query=query, post_types=post_types, records=ordered, page=page)
