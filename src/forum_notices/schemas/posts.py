"""
Schemas for querying and returning posts.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from forum_notices.models.posts import PostStatus

DEFAULT_POSTS_PER_PAGE = 5


class PostQuery(BaseModel):
    """
    Arguments for a post query, see crud.posts.get_posts.

    Plugins expose their query arguments through filters before running them,
    so this model is passed around and copied with updates rather than mutated.
    """

    post_type: str | list[str] = Field("post", description="Content type(s) to return.")
    post_status: PostStatus | list[PostStatus] = Field(PostStatus.PUBLISH, description="Status(es) to return.")
    parent_id: int | None = Field(None, description="Only return children of this post.")
    nopaging: bool = Field(False, description="Return every matching post, ignoring posts_per_page.")
    posts_per_page: int = Field(DEFAULT_POSTS_PER_PAGE, ge=1)
    order: Literal["ASC", "DESC"] = Field("DESC", description="Order by creation time.")


class NoticeResponse(BaseModel):
    """A published notice as shown outside of the forum pages (e.g. the CLI)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    notice_type: str = Field("", description="Stored notice type, empty string when unset.")
    created_at: datetime
