"""
Tests for reading host content
"""

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from utils.mock_utils import create_complete_content, create_test_content

from meta_auditor.models.content import ContentStatus
from meta_auditor.services.content_store import ContentStore


class TestListPostTypes:
    @pytest.mark.asyncio
    async def test_public_types_sorted_by_name(self, test_db: AsyncSession):
        types = await ContentStore(test_db).list_post_types()
        assert [t.name for t in types] == ["page", "post", "product"]

    @pytest.mark.asyncio
    async def test_include_private_types(self, test_db: AsyncSession):
        types = await ContentStore(test_db).list_post_types(public_only=False)
        assert "revision" in [t.name for t in types]


class TestFetchRecords:
    @pytest.mark.asyncio
    async def test_only_audited_statuses(self, test_db: AsyncSession):
        published = await create_test_content(test_db, "Published", status=ContentStatus.PUBLISH)
        draft = await create_test_content(test_db, "Draft", status=ContentStatus.DRAFT)
        pending = await create_test_content(test_db, "Pending", status=ContentStatus.PENDING)
        await create_test_content(test_db, "Private", status=ContentStatus.PRIVATE)
        await create_test_content(test_db, "Trashed", status=ContentStatus.TRASH)

        records = await ContentStore(test_db).fetch_records(["page"])

        assert [r.id for r in records] == [published.id, draft.id, pending.id]

    @pytest.mark.asyncio
    async def test_grouped_by_type_in_selection_order(self, test_db: AsyncSession):
        page = await create_test_content(test_db, "Page", post_type="page")
        post = await create_test_content(test_db, "Post", post_type="post")
        page2 = await create_test_content(test_db, "Page 2", post_type="page")

        records = await ContentStore(test_db).fetch_records(["post", "page"])

        assert [r.id for r in records] == [post.id, page.id, page2.id]

    @pytest.mark.asyncio
    async def test_empty_selection(self, test_db: AsyncSession):
        await create_test_content(test_db, "Page")
        assert await ContentStore(test_db).fetch_records([]) == []

    @pytest.mark.asyncio
    async def test_null_metadata_becomes_empty_string(self, test_db: AsyncSession):
        await create_test_content(test_db, "Bare")
        record = (await ContentStore(test_db).fetch_records(["page"]))[0]
        assert record.meta_title == ""
        assert record.meta_desc == ""
        assert record.focus_kw == ""

    @pytest.mark.asyncio
    async def test_record_fields(self, test_db: AsyncSession):
        content = await create_complete_content(
            test_db,
            "Home",
            meta_title="Home &amp; Garden",
            updated_at=datetime(2024, 3, 9, 14, 30),
        )
        record = (await ContentStore(test_db).fetch_records(["page"]))[0]

        assert record.id == content.id
        assert record.type == "page"
        # Stored values are passed through undecoded
        assert record.meta_title == "Home &amp; Garden"
        assert record.meta_desc == "All about Home"
        assert record.focus_kw == "home"
        assert record.modified == "2024-03-09"
