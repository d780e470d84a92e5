"""
Tests for in-memory pagination and the numbered link strip
"""

from urllib.parse import parse_qs, urlparse

from meta_auditor.utils.pagination import (
    DOTS_TEXT,
    NEXT_TEXT,
    PREV_TEXT,
    build_url,
    page_links,
    paginate,
    total_pages_for,
)


def labels(links) -> list[str]:
    return [link.label for link in links]


class TestPaginate:
    def test_total_pages_rounds_up(self):
        assert total_pages_for(26, 25) == 2
        assert total_pages_for(25, 25) == 1
        assert total_pages_for(0, 25) == 1

    def test_pages_concatenate_to_the_list(self):
        items = list(range(57))
        pages = [paginate(items, n, 10) for n in range(1, 7)]
        assert [x for p in pages for x in p.items] == items

    def test_last_page_is_short(self):
        page = paginate(list(range(57)), 6, 10)
        assert page.items == list(range(50, 57))
        assert page.has_next is False
        assert page.has_previous is True

    def test_out_of_range_page_is_clamped(self):
        assert paginate(list(range(5)), 9, 10).page == 1
        assert paginate(list(range(30)), 0, 10).page == 1
        assert paginate(list(range(30)), 7, 10).page == 3

    def test_empty_list(self):
        page = paginate([], 1, 25)
        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 1


class TestBuildUrl:
    def test_lists_become_repeated_keys(self):
        url = build_url("/r", {"post_types": ["page", "post"], "per_page": 10})
        assert parse_qs(urlparse(url).query) == {"post_types": ["page", "post"], "per_page": ["10"]}

    def test_no_params(self):
        assert build_url("/r", {}) == "/r"

    def test_values_are_encoded(self):
        assert build_url("/r", {"search": "a&b c"}) == "/r?search=a%26b+c"


class TestPageLinks:
    def test_single_page_has_no_links(self):
        assert page_links(1, 1, "/r", {}) == []

    def test_first_page_of_three(self):
        links = page_links(3, 1, "/r", {})
        assert labels(links) == ["1", "2", "3", NEXT_TEXT]
        assert links[0].current is True
        assert links[0].url is None

    def test_middle_page_of_many(self):
        links = page_links(20, 10, "/r", {})
        assert labels(links) == [PREV_TEXT, "1", DOTS_TEXT, "8", "9", "10", "11", "12", DOTS_TEXT, "20", NEXT_TEXT]
        assert [link.dots for link in links].count(True) == 2

    def test_near_start(self):
        links = page_links(10, 2, "/r", {})
        assert labels(links) == [PREV_TEXT, "1", "2", "3", "4", DOTS_TEXT, "10", NEXT_TEXT]

    def test_last_page(self):
        links = page_links(10, 10, "/r", {})
        assert labels(links) == [PREV_TEXT, "1", DOTS_TEXT, "8", "9", "10"]

    def test_links_preserve_params(self):
        params = {"search": "seo", "post_types": ["page", "post"], "sort": "title", "order": "desc"}
        links = page_links(3, 2, "/r", params)
        next_link = links[-1]
        query = parse_qs(urlparse(next_link.url).query)
        assert query == {
            "search": ["seo"],
            "post_types": ["page", "post"],
            "sort": ["title"],
            "order": ["desc"],
            "paged": ["3"],
        }

    def test_page_one_link_omits_paged(self):
        links = page_links(3, 2, "/r", {"paged": 2, "per_page": 10})
        assert links[0].label == PREV_TEXT
        assert "paged" not in parse_qs(urlparse(links[0].url).query)
