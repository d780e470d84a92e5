"""
Content Store

Read access to the host's content records and registered post types.
Records are fetched fresh on every call; nothing is cached.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from meta_auditor.models.content import AUDITED_STATUSES, Content
from meta_auditor.models.post_type import PostType
from meta_auditor.schemas.audit import ContentRecord

logger = logging.getLogger(__name__)

MODIFIED_DATE_FORMAT = "%Y-%m-%d"


def to_record(content: Content) -> ContentRecord:
    """Project a host content row onto the auditor's record shape."""
    return ContentRecord(
        id=content.id,
        title=content.title or "",
        type=content.post_type,
        meta_title=content.meta_title or "",
        meta_desc=content.meta_description or "",
        focus_kw=content.focus_keyword or "",
        modified=content.updated_at.strftime(MODIFIED_DATE_FORMAT) if content.updated_at else "",
    )


class ContentStore:
    """Queries against the host content tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_post_types(self, public_only: bool = True) -> list[PostType]:
        stmt = select(PostType).order_by(PostType.name)
        if public_only:
            stmt = stmt.where(PostType.public.is_(True))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def fetch_records(self, post_types: list[str]) -> list[ContentRecord]:
        """
        Fetch every published, draft and pending item of each post type.

        Types are queried in the order given, so records are grouped by type
        in selection order and by id within a type. Database errors are not
        handled here.

        Args:
            post_types: Post type slugs to fetch

        Returns:
            List of ContentRecord
        """
        records: list[ContentRecord] = []
        for post_type in post_types:
            stmt = (
                select(Content)
                .where(Content.post_type == post_type)
                .where(Content.status.in_(AUDITED_STATUSES))
                .order_by(Content.id)
            )
            result = await self.db.execute(stmt)
            records.extend(to_record(c) for c in result.scalars().all())

        logger.debug(f"Fetched {len(records)} records for post types {post_types}")
        return records
