"""
Pagination Utilities

Offset pagination over an in-memory list plus the numbered link strip shown
under the report table.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel

T = TypeVar("T")

PREV_TEXT = "«"
NEXT_TEXT = "»"
DOTS_TEXT = "…"

# Pages always shown at each end, and around the current page
END_SIZE = 1
MID_SIZE = 2


@dataclass
class Page(Generic[T]):
    """One page of a list together with its position in the whole."""

    items: list[T]
    total: int
    page: int
    per_page: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass
class PageLink:
    """A single entry of the pagination strip."""

    label: str
    url: str | None = None
    current: bool = False
    dots: bool = False


class PaginatedResponse(BaseModel, Generic[T]):
    """Standard paginated response model"""

    items: list[Any]
    total: int
    page: int
    per_page: int
    total_pages: int
    has_next: bool
    has_previous: bool


def total_pages_for(total: int, per_page: int) -> int:
    """Number of pages for ``total`` items, never less than one."""
    return max(1, math.ceil(total / per_page))


def paginate(items: Sequence[T], page: int, per_page: int) -> Page[T]:
    """
    Slice ``items`` to the requested page.

    The page number is clamped to ``[1, total_pages]`` so an out-of-range
    request shows the nearest real page instead of an empty table.
    """
    total = len(items)
    pages = total_pages_for(total, per_page)
    page = min(max(1, page), pages)
    offset = (page - 1) * per_page
    return Page(
        items=list(items[offset : offset + per_page]),
        total=total,
        page=page,
        per_page=per_page,
        total_pages=pages,
    )


def build_url(base_url: str, params: Mapping[str, Any]) -> str:
    """Append ``params`` to ``base_url``; list values become repeated keys."""
    query = urlencode(params, doseq=True)
    return f"{base_url}?{query}" if query else base_url


def page_links(total_pages: int, current: int, base_url: str, params: Mapping[str, Any]) -> list[PageLink]:
    """
    Build the numbered pagination strip.

    Returns an empty list when there is only one page. Every URL carries
    ``params`` unchanged; only ``paged`` varies (and is left out for page 1).

    Args:
        total_pages: Number of pages
        current: Current (already clamped) page number
        base_url: Path the links point at
        params: Active filter/sort parameters to preserve

    Returns:
        List of PageLink entries in display order
    """
    if total_pages < 2:
        return []

    def url_for(number: int) -> str:
        link_params = {k: v for k, v in params.items() if k != "paged"}
        if number > 1:
            link_params["paged"] = number
        return build_url(base_url, link_params)

    links: list[PageLink] = []
    if current > 1:
        links.append(PageLink(label=PREV_TEXT, url=url_for(current - 1)))

    dots = False
    for number in range(1, total_pages + 1):
        if number == current:
            links.append(PageLink(label=str(number), current=True))
            dots = True
        elif (
            number <= END_SIZE
            or current - MID_SIZE <= number <= current + MID_SIZE
            or number > total_pages - END_SIZE
        ):
            links.append(PageLink(label=str(number), url=url_for(number)))
            dots = True
        elif dots:
            links.append(PageLink(label=DOTS_TEXT, dots=True))
            dots = False

    if current < total_pages:
        links.append(PageLink(label=NEXT_TEXT, url=url_for(current + 1)))

    return links
