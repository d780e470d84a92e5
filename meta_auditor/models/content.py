from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, Index
from meta_auditor.database import Base
from datetime import datetime
import enum


class ContentStatus(str, enum.Enum):
    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    TRASH = "trash"


# Statuses the auditor reports on
AUDITED_STATUSES = (ContentStatus.PUBLISH, ContentStatus.DRAFT, ContentStatus.PENDING)


class Content(Base):
    __tablename__ = "content"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String, nullable=False, default="")
    post_type = Column(String, nullable=False, index=True)
    status = Column(Enum(ContentStatus), default=ContentStatus.DRAFT, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # SEO metadata fields
    meta_title = Column(Text, nullable=True)
    meta_description = Column(Text, nullable=True)
    focus_keyword = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_content_type_status", "post_type", "status"),
    )
