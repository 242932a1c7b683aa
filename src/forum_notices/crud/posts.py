"""
CRUD operations on the post and post_meta tables.

This is the host's content storage: plugins never touch the tables directly,
they go through these functions (or hooks fired by the routes using them).

Functions here do not commit, the caller owns the transaction.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_notices.exceptions import PostNotFoundError
from forum_notices.models.posts import PostDB, PostMetaDB, PostStatus
from forum_notices.schemas.posts import PostQuery

logger = logging.getLogger(__name__)


def create_post(
    db: Session,
    post_type: str,
    title: str = "",
    content: str = "",
    status: PostStatus = PostStatus.DRAFT,
    parent_id: int | None = None,
) -> PostDB:
    """Create a new post and flush it so it is given an id."""
    post = PostDB(post_type=post_type, title=title, content=content, status=status, parent_id=parent_id)
    db.add(post)
    db.flush()
    logger.debug(f"Created post: {post!r}")
    return post


def get_post(db: Session, post_id: int) -> PostDB | None:
    """Get post by ID."""
    return db.get(PostDB, post_id)


def get_post_or_raise(db: Session, post_id: int) -> PostDB:
    """Get post by ID, but raise PostNotFoundError if it does not exist."""
    post = db.get(PostDB, post_id)
    if not post:
        raise PostNotFoundError(post_id=post_id)
    return post


def get_post_type(db: Session, post_id: int) -> str | None:
    """Return the post type of a post, or None if the post does not exist."""
    stmt = select(PostDB.post_type).where(PostDB.id == post_id)
    return db.execute(stmt).scalar_one_or_none()


def update_post(
    db: Session,
    post: PostDB,
    title: str | None = None,
    content: str | None = None,
    status: PostStatus | None = None,
) -> PostDB:
    """Update the given fields of a post, fields left as None are not changed."""
    if title is not None:
        post.title = title
    if content is not None:
        post.content = content
    if status is not None:
        post.status = status
    db.flush()
    return post


def trash_post(db: Session, post: PostDB) -> PostDB:
    """Move a post to the trash. Trashed posts keep their meta."""
    return update_post(db=db, post=post, status=PostStatus.TRASH)


def get_posts(db: Session, query: PostQuery) -> list[PostDB]:
    """
    Get all posts matching the query, newest first by default.

    Ties on creation time (which has a resolution of 1 second on some backends) are broken by id,
    so the ordering is stable.
    """
    post_types = query.post_type if isinstance(query.post_type, list) else [query.post_type]
    statuses = query.post_status if isinstance(query.post_status, list) else [query.post_status]

    stmt = select(PostDB).where(PostDB.post_type.in_(post_types)).where(PostDB.status.in_(statuses))
    if query.parent_id is not None:
        stmt = stmt.where(PostDB.parent_id == query.parent_id)

    if query.order == "ASC":
        stmt = stmt.order_by(PostDB.created_at.asc(), PostDB.id.asc())
    else:
        stmt = stmt.order_by(PostDB.created_at.desc(), PostDB.id.desc())

    if not query.nopaging:
        stmt = stmt.limit(query.posts_per_page)

    return list(db.execute(stmt).scalars().all())


def _get_meta_entry(db: Session, post_id: int, meta_key: str) -> PostMetaDB | None:
    stmt = select(PostMetaDB).where(PostMetaDB.post_id == post_id).where(PostMetaDB.meta_key == meta_key)
    return db.execute(stmt).scalar_one_or_none()


def get_post_meta(db: Session, post_id: int, meta_key: str) -> str:
    """Get a single meta value of a post. Returns an empty string if the key is not set."""
    entry = _get_meta_entry(db=db, post_id=post_id, meta_key=meta_key)
    return entry.meta_value if entry else ""


def has_post_meta(db: Session, post_id: int, meta_key: str) -> bool:
    """Check if a meta key is set on a post, as get_post_meta can not tell unset from an empty value."""
    return _get_meta_entry(db=db, post_id=post_id, meta_key=meta_key) is not None


def update_post_meta(db: Session, post_id: int, meta_key: str, meta_value: str) -> PostMetaDB:
    """Set a meta value on a post, overwriting any previous value for that key."""
    entry = _get_meta_entry(db=db, post_id=post_id, meta_key=meta_key)
    if entry:
        entry.meta_value = meta_value
    else:
        entry = PostMetaDB(post_id=post_id, meta_key=meta_key, meta_value=meta_value)
        db.add(entry)
    db.flush()
    return entry


def delete_post_meta(db: Session, post_id: int, meta_key: str) -> bool:
    """Remove a meta key from a post. Returns False if there was nothing to delete."""
    entry = _get_meta_entry(db=db, post_id=post_id, meta_key=meta_key)
    if not entry:
        return False
    db.delete(entry)
    db.flush()
    return True
