"""
Audit Schemas

ContentRecord is the projection of a host content row the auditor works on.
AuditQuery is the per-request filter/sort/pagination state, built once from
the query string and coerced so that malformed input degrades to defaults
instead of failing the view.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from meta_auditor.utils.sanitize import sanitize_plain_text

PER_PAGE_CHOICES = (10, 25, 50, 100)
DEFAULT_PER_PAGE = 25

_FALSY = {"", "0", "false", "off", "no"}


class SortKey(str, Enum):
    ID = "id"
    TITLE = "title"
    TYPE = "type"
    META_TITLE = "meta_title"
    META_DESC = "meta_desc"
    FOCUS_KW = "focus_kw"
    MODIFIED = "modified"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ContentRecord(BaseModel):
    """One content item with its SEO metadata, as read from the host store."""

    id: int
    title: str = ""
    type: str
    meta_title: str = ""
    meta_desc: str = ""
    focus_kw: str = ""
    modified: str = ""


def _to_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


class AuditQuery(BaseModel):
    """Validated report parameters for a single request."""

    search: str = ""
    post_types: list[str] = Field(default_factory=list)
    post_types_supplied: bool = False
    missing_title: bool = False
    missing_desc: bool = False
    missing_kw: bool = False
    sort: SortKey | None = SortKey.ID
    order: SortOrder = SortOrder.ASC
    per_page: int = DEFAULT_PER_PAGE
    page: int = 1

    @field_validator("search", mode="before")
    @classmethod
    def _clean_search(cls, value: Any) -> str:
        return sanitize_plain_text(value if isinstance(value, str) else None)

    @field_validator("post_types", mode="before")
    @classmethod
    def _clean_post_types(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        cleaned = (sanitize_plain_text(str(v)) for v in value)
        return [v for v in cleaned if v]

    @field_validator("missing_title", "missing_desc", "missing_kw", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() not in _FALSY

    @field_validator("sort", mode="before")
    @classmethod
    def _coerce_sort(cls, value: Any) -> SortKey | None:
        # Unknown keys disable sorting rather than failing the request
        if isinstance(value, SortKey) or value is None:
            return value
        try:
            return SortKey(str(value))
        except ValueError:
            return None

    @field_validator("order", mode="before")
    @classmethod
    def _coerce_order(cls, value: Any) -> SortOrder:
        return SortOrder.DESC if str(getattr(value, "value", value)) == "desc" else SortOrder.ASC

    @field_validator("per_page", mode="before")
    @classmethod
    def _coerce_per_page(cls, value: Any) -> int:
        per_page = _to_int(value, DEFAULT_PER_PAGE)
        return per_page if per_page in PER_PAGE_CHOICES else DEFAULT_PER_PAGE

    @field_validator("page", mode="before")
    @classmethod
    def _coerce_page(cls, value: Any) -> int:
        return max(1, _to_int(value, 1))

    @classmethod
    def from_query_params(cls, params: Mapping[str, Any]) -> "AuditQuery":
        """
        Build the query from request parameters.

        Accepts a Starlette ``QueryParams`` (multi-valued ``post_types``) or a
        plain mapping. ``post_types[]`` is accepted as an alias of
        ``post_types`` for forms posted by the host admin.
        """
        if hasattr(params, "getlist"):
            types = params.getlist("post_types") + params.getlist("post_types[]")
        else:
            types = params.get("post_types") or params.get("post_types[]")
        supplied = "post_types" in params or "post_types[]" in params

        data: dict[str, Any] = {
            "search": params.get("search", ""),
            "post_types": types,
            "post_types_supplied": supplied,
            "missing_title": params.get("missing_title"),
            "missing_desc": params.get("missing_desc"),
            "missing_kw": params.get("missing_kw"),
            "order": params.get("order", SortOrder.ASC.value),
            "per_page": params.get("per_page", DEFAULT_PER_PAGE),
            "page": params.get("paged", 1),
        }
        if "sort" in params:
            data["sort"] = params.get("sort")
        return cls(**data)
