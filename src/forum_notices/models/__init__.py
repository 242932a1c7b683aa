"""
Import all models here to ensure proper initialization order.

They are imported in dependency order to avoid circular import issues.
"""

from forum_notices.models.base import Base, BaseDBModel
from forum_notices.models.posts import PostDB, PostMetaDB, PostStatus

__all__ = [
    "Base",
    "BaseDBModel",
    "PostDB",
    "PostMetaDB",
    "PostStatus",
]
