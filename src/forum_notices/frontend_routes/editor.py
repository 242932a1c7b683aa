"""
Frontend routes for the admin editing screens of every content type with admin screens (show_ui).

Flow for a new post:
1. GET /edit/new/<post_type> creates an auto-draft and redirects to its edit screen.
2. GET /edit/<id> renders the edit screen, plugins add to its submit box through the post_submitbox_start hook.
3. POST /edit/<id> saves the post, fires save_post with the submitted form, and redirects
   back to the edit screen with a message code, turned into text with the post_updated_messages filter.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from forum_notices.crud.posts import create_post, get_post_or_raise, get_posts, trash_post, update_post
from forum_notices.db import get_db
from forum_notices.exceptions import ContentTypeNotFoundError, PostNotFoundError
from forum_notices.frontend_routes.core import templates
from forum_notices.host.content_types import BUILTIN_POST_TYPE, ContentType
from forum_notices.host.context import HostContext, get_host_context
from forum_notices.host.hooks import HostEvent
from forum_notices.models.posts import PostStatus
from forum_notices.schemas.posts import PostQuery

logger = logging.getLogger(__name__)

fr_editor_router = APIRouter()

EDITABLE_STATUSES = [PostStatus.DRAFT, PostStatus.PENDING, PostStatus.PUBLISH]

# Message codes: 1 = updated, 4 = updated, 6 = published, 7 = saved, 8 = submitted for review.
MESSAGE_UPDATED = 1
MESSAGE_PUBLISHED = 6
MESSAGE_SAVED = 7
MESSAGE_SUBMITTED = 8

DEFAULT_UPDATED_MESSAGES = {
    BUILTIN_POST_TYPE: {
        1: "Post updated.",
        4: "Post updated.",
        6: "Post published.",
        7: "Post saved.",
        8: "Post submitted.",
    },
}


async def get_submitted_form(request: Request) -> dict[str, str]:
    """Dependency giving the submitted form fields, file uploads are not supported and are dropped."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _get_editable_content_type(host: HostContext, post_type: str) -> ContentType:
    content_type = host.content_types.get(post_type)
    if content_type is None or not content_type.args.show_ui:
        raise ContentTypeNotFoundError(post_type=post_type)
    return content_type


def _admin_menu(host: HostContext) -> list[tuple[ContentType, list[ContentType]]]:
    """Top level menu entries with their sub menus."""
    content_types = host.content_types
    return [(content_type, content_types.submenu(content_type.name)) for content_type in content_types.top_level_menu()]


def get_updated_message(host: HostContext, post_type: str, message_code: int | None) -> str | None:
    """Text for a message code, content types without messages of their own use the generic post messages."""
    if message_code is None:
        return None
    messages = host.hooks.apply_filters(HostEvent.POST_UPDATED_MESSAGES, DEFAULT_UPDATED_MESSAGES)
    type_messages = messages.get(post_type, messages[BUILTIN_POST_TYPE])
    return type_messages.get(message_code)


def _status_from_form(form: dict[str, str], current_status: PostStatus) -> PostStatus:
    """Status chosen in the form. Anything not allowed from the edit screen keeps the post's status."""
    try:
        new_status = PostStatus(form.get("status", ""))
    except ValueError:
        new_status = current_status

    if new_status not in EDITABLE_STATUSES:
        return PostStatus.DRAFT if current_status == PostStatus.AUTO_DRAFT else current_status
    return new_status


def _message_code(previous_status: PostStatus, new_status: PostStatus) -> int:
    if new_status == PostStatus.PUBLISH and previous_status != PostStatus.PUBLISH:
        return MESSAGE_PUBLISHED
    if new_status == PostStatus.PENDING:
        return MESSAGE_SUBMITTED
    if new_status == PostStatus.DRAFT:
        return MESSAGE_SAVED
    return MESSAGE_UPDATED


@fr_editor_router.get("/", response_class=HTMLResponse)
def get_list_screen(
    request: Request,
    post_type: str = BUILTIN_POST_TYPE,
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
):
    """Render the list of all (non trashed) posts of a content type."""
    content_type = _get_editable_content_type(host=host, post_type=post_type)
    posts = get_posts(db=db, query=PostQuery(post_type=post_type, post_status=EDITABLE_STATUSES, nopaging=True))
    return templates.TemplateResponse(
        request=request,
        name="admin_pages/list.html",
        context={
            "request": request,
            "content_type": content_type,
            "posts": posts,
            "admin_menu": _admin_menu(host),
        },
    )


@fr_editor_router.get("/new/{post_type}")
def get_new_post_screen(
    post_type: str,
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
):
    """Create an auto-draft of the content type and send the user to its edit screen."""
    _get_editable_content_type(host=host, post_type=post_type)
    post = create_post(db=db, post_type=post_type, status=PostStatus.AUTO_DRAFT)
    db.commit()
    logger.info(f"Auto-draft created: {post!r}")
    return RedirectResponse(url=f"/edit/{post.id}", status_code=status.HTTP_302_FOUND)


@fr_editor_router.get("/{post_id}", response_class=HTMLResponse)
def get_edit_screen(
    request: Request,
    post_id: int,
    message: int | None = None,
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
):
    """Render the edit screen of a post."""
    post = get_post_or_raise(db=db, post_id=post_id)
    if post.status == PostStatus.TRASH:
        raise PostNotFoundError(post_id=post_id, message="You cannot edit this item because it is in the Trash.")
    content_type = _get_editable_content_type(host=host, post_type=post.post_type)

    submitbox_start = host.hooks.render(HostEvent.POST_SUBMITBOX_START, db, post)
    return templates.TemplateResponse(
        request=request,
        name="admin_pages/edit.html",
        context={
            "request": request,
            "post": post,
            "content_type": content_type,
            "statuses": EDITABLE_STATUSES,
            "submitbox_start": submitbox_start,
            "message": get_updated_message(host=host, post_type=post.post_type, message_code=message),
            "admin_menu": _admin_menu(host),
        },
    )


@fr_editor_router.post("/{post_id}")
def post_edit_screen(
    post_id: int,
    form: dict[str, str] = Depends(get_submitted_form),
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
):
    """Save a post from its edit screen, then fire save_post so plugins can save their own fields."""
    post = get_post_or_raise(db=db, post_id=post_id)
    if post.status == PostStatus.TRASH:
        raise PostNotFoundError(post_id=post_id, message="You cannot edit this item because it is in the Trash.")
    _get_editable_content_type(host=host, post_type=post.post_type)

    previous_status = post.status
    new_status = _status_from_form(form=form, current_status=previous_status)
    update_post(db=db, post=post, title=form.get("title", ""), content=form.get("content", ""), status=new_status)

    host.hooks.do_action(HostEvent.SAVE_POST, db, post.id, form)
    db.commit()
    logger.info(f"Post saved: {post!r}")

    message_code = _message_code(previous_status=previous_status, new_status=new_status)
    return RedirectResponse(url=f"/edit/{post.id}?message={message_code}", status_code=status.HTTP_303_SEE_OTHER)


@fr_editor_router.post("/{post_id}/trash")
def post_trash(
    post_id: int,
    db: Session = Depends(get_db),
    host: HostContext = Depends(get_host_context),
):
    """Move a post to the trash and go back to the list screen of its content type."""
    post = get_post_or_raise(db=db, post_id=post_id)
    _get_editable_content_type(host=host, post_type=post.post_type)
    trash_post(db=db, post=post)
    db.commit()
    logger.info(f"Post trashed: {post!r}")
    return RedirectResponse(url=f"/edit/?post_type={post.post_type}", status_code=status.HTTP_303_SEE_OTHER)
