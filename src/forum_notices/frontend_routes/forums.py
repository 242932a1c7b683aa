"""
Frontend routes for the forums: the forum index, single forums and single topics.

Each page fires its "before" hook just above its content, which is where plugins
(e.g. bbPress Notices) add their own output.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from forum_notices.crud.posts import get_post, get_post_or_raise, get_posts
from forum_notices.db import get_db
from forum_notices.exceptions import ContentTypeNotFoundError, PostNotFoundError
from forum_notices.frontend_routes.core import templates
from forum_notices.host.context import HostContext, get_host_context
from forum_notices.host.forum import FORUM_POST_TYPE, ForumSystem
from forum_notices.host.formatting import autop
from forum_notices.host.hooks import HostEvent
from forum_notices.models.posts import PostDB, PostStatus
from forum_notices.schemas.posts import PostQuery

logger = logging.getLogger(__name__)

fr_forums_router = APIRouter()
fr_topics_router = APIRouter()


def get_forum_system(host: HostContext = Depends(get_host_context)) -> ForumSystem:
    """Dependency for routes that need the forum system, these 404 when it is disabled."""
    if host.forum is None:
        raise ContentTypeNotFoundError(post_type=FORUM_POST_TYPE)
    return host.forum


def _get_published_post_or_raise(db: Session, post_id: int, post_type: str) -> PostDB:
    """Drafts, trashed posts and posts of another type are treated as not existing on the frontend."""
    post = get_post_or_raise(db=db, post_id=post_id)
    if post.post_type != post_type or post.status != PostStatus.PUBLISH:
        raise PostNotFoundError(post_id=post_id)
    return post


@fr_forums_router.get("/", response_class=HTMLResponse)
def get_forums_index(
    request: Request,
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
    forum_system: ForumSystem = Depends(get_forum_system),
):
    """Render the list of all published forums."""
    forums = get_posts(db=db, query=PostQuery(post_type=forum_system.forum_post_type, nopaging=True, order="ASC"))
    before_content = host.hooks.render(HostEvent.BEFORE_FORUMS_INDEX, db)
    return templates.TemplateResponse(
        request=request,
        name="forum_pages/index.html",
        context={"request": request, "forums": forums, "before_content": before_content},
    )


@fr_forums_router.get("/{forum_id}", response_class=HTMLResponse)
def get_single_forum(
    request: Request,
    forum_id: int,
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
    forum_system: ForumSystem = Depends(get_forum_system),
):
    """Render a forum and the list of its published topics."""
    forum = _get_published_post_or_raise(db=db, post_id=forum_id, post_type=forum_system.forum_post_type)
    topics = get_posts(
        db=db,
        query=PostQuery(post_type=forum_system.topic_post_type, parent_id=forum.id, nopaging=True),
    )
    before_content = host.hooks.render(HostEvent.BEFORE_SINGLE_FORUM, db)
    return templates.TemplateResponse(
        request=request,
        name="forum_pages/forum.html",
        context={
            "request": request,
            "forum": forum,
            "forum_content": autop(forum.content),
            "topics": topics,
            "before_content": before_content,
        },
    )


@fr_topics_router.get("/{topic_id}", response_class=HTMLResponse)
def get_single_topic(
    request: Request,
    topic_id: int,
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
    forum_system: ForumSystem = Depends(get_forum_system),
):
    """Render a single topic."""
    topic = _get_published_post_or_raise(db=db, post_id=topic_id, post_type=forum_system.topic_post_type)
    forum = get_post(db=db, post_id=topic.parent_id) if topic.parent_id else None
    before_content = host.hooks.render(HostEvent.BEFORE_SINGLE_TOPIC, db)
    return templates.TemplateResponse(
        request=request,
        name="forum_pages/topic.html",
        context={
            "request": request,
            "topic": topic,
            "topic_content": autop(topic.content),
            "forum": forum,
            "before_content": before_content,
        },
    )
