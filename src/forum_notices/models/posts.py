"""
Post and Post Meta DB Models.

Every piece of content the host stores is a post: forums, topics and any type
registered by a plugin (e.g. notices). What kind of content a post holds is given by post_type.

Plugins attach their own data to posts through post meta (key/value pairs),
rather than by adding columns.
"""

from enum import StrEnum

from sqlalchemy import Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_notices.models.base import BaseDBModel


class PostStatus(StrEnum):
    """
    Possible statuses of a post.

    AUTO_DRAFT is given to a post created by opening the "add new" screen, before it is first saved.
    Only PUBLISH posts are shown on the frontend.
    """

    AUTO_DRAFT = "auto-draft"
    DRAFT = "draft"
    PENDING = "pending"
    PUBLISH = "publish"
    TRASH = "trash"


class PostDB(BaseDBModel):
    """
    DB Model for a post.

    id, created_at and updated_at are inherited from BaseDBModel.
    parent_id is used by topics to point at the forum they belong to.
    """

    __tablename__ = "post"

    post_type: Mapped[str] = mapped_column(String(20), index=True)
    title: Mapped[str] = mapped_column(String(255), default="")
    content: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, values_callable=lambda statuses: [s.value for s in statuses]),
        index=True,
        default=PostStatus.DRAFT,
    )
    parent_id: Mapped[int | None] = mapped_column(ForeignKey("post.id"), nullable=True, index=True)

    meta: Mapped[list["PostMetaDB"]] = relationship(
        "PostMetaDB", back_populates="post", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<PostDB id={self.id}, post_type={self.post_type}, status={self.status}, title={self.title}>"


class PostMetaDB(BaseDBModel):
    """
    DB Model for a single post meta entry.

    A post has at most one value per meta_key.
    """

    __tablename__ = "post_meta"
    __table_args__ = (UniqueConstraint("post_id", "meta_key", name="unique_post_meta_key"),)

    post_id: Mapped[int] = mapped_column(ForeignKey("post.id", ondelete="CASCADE"), index=True)
    meta_key: Mapped[str] = mapped_column(String(255), index=True)
    meta_value: Mapped[str] = mapped_column(Text, default="")

    post: Mapped["PostDB"] = relationship("PostDB", back_populates="meta")

    def __repr__(self) -> str:
        return f"<PostMetaDB id={self.id}, post_id={self.post_id}, meta_key={self.meta_key}>"
