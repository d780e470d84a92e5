from sqlalchemy import Boolean, Column, String
from meta_auditor.database import Base


# Content types registered with the host
class PostType(Base):
    __tablename__ = "post_types"

    name = Column(String, primary_key=True)  # slug, e.g. "page"
    label = Column(String, nullable=False)  # plural display label, e.g. "Pages"
    public = Column(Boolean, default=True, nullable=False)
