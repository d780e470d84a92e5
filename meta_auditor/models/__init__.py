from .content import AUDITED_STATUSES, Content, ContentStatus
from .post_type import PostType
from .user import Role, User

__all__ = [
    "AUDITED_STATUSES",
    "Content",
    "ContentStatus",
    "PostType",
    "Role",
    "User",
]
