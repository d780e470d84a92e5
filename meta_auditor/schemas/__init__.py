from .audit import (
    DEFAULT_PER_PAGE,
    PER_PAGE_CHOICES,
    AuditQuery,
    ContentRecord,
    SortKey,
    SortOrder,
)

__all__ = [
    "DEFAULT_PER_PAGE",
    "PER_PAGE_CHOICES",
    "AuditQuery",
    "ContentRecord",
    "SortKey",
    "SortOrder",
]
