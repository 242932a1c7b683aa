"""
Manage the starlette-admin interface for the Forum Notices app.

This is a database level view of the content storage, for inspecting posts and the meta
plugins attach to them. Posts should be written through the edit screens (/edit/) so that
save_post fires and plugins get to save their fields, so creation and deletion are disabled here.
"""

import logging

from fastapi import FastAPI
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request
from starlette_admin import DateTimeField, HasOne, IntegerField, StringField, TextAreaField
from starlette_admin.contrib.sqla import Admin, ModelView
from starlette_admin.exceptions import FormValidationError

from forum_notices.models.posts import PostDB, PostMetaDB

logger = logging.getLogger(__name__)

PAGINATION_DEFAULTS = [10, 25, 100, -1]  # (for number of items per page toggle)


class PostView(ModelView):
    """
    Custom admin panel View for the PostDB model.

    Status and content can be fixed from here, changing the post type of an existing post is not allowed.
    """

    page_size_options = PAGINATION_DEFAULTS
    fields = [
        IntegerField("id", label="ID", disabled=True),
        StringField("post_type", label="Content Type", disabled=True),
        StringField("title", label="Title"),
        TextAreaField("content", label="Content"),
        StringField("status", label="Status", required=True, help_text="auto-draft, draft, pending, publish or trash"),
        IntegerField("parent_id", label="Parent ID", required=False),
        DateTimeField("created_at", label="Created At", disabled=True),
        DateTimeField("updated_at", label="Updated At", disabled=True),
    ]
    fields_default_sort = [("id", True)]  # False = descending, True = ascending

    exclude_fields_from_list = ["content"]
    exclude_fields_from_edit = ["id", "post_type", "created_at", "updated_at"]

    def can_create(self, request: Request) -> bool:
        """Posts are created from the edit screens."""
        return False

    def can_delete(self, request: Request) -> bool:
        """Posts are moved to the trash instead, set the status to trash."""
        return False

    def handle_exception(self, exc: Exception) -> None:
        """An unknown status is rejected by the Enum column, show that as a form error instead of a 500."""
        if isinstance(exc, (LookupError, ValueError)):
            raise FormValidationError(errors={"status": f"Not a valid status: {exc}"})
        if isinstance(exc, IntegrityError):
            raise FormValidationError(errors={"parent_id": "The parent post does not exist."})
        return super().handle_exception(exc)


class PostMetaView(ModelView):
    """
    Custom admin panel View for PostMetaDB.

    Read only, meta values are owned by the plugin that wrote them.
    """

    page_size_options = PAGINATION_DEFAULTS
    fields = [
        IntegerField("id", label="ID", disabled=True),
        HasOne("post", identity="post", label="Post"),
        StringField("meta_key", label="Key", disabled=True),
        TextAreaField("meta_value", label="Value", disabled=True),
        DateTimeField("updated_at", label="Updated At", disabled=True),
    ]

    def can_create(self, request: Request) -> bool:
        return False

    def can_edit(self, request: Request) -> bool:
        return False

    def can_delete(self, request: Request) -> bool:
        return False


def register_admin_panel(app: FastAPI, engine: Engine) -> None:
    """
    Create and register an admin panel for the FastAPI app.
    """
    admin = Admin(engine=engine, title="Forum Notices Admin")

    admin.add_view(PostView(PostDB, icon="fas fa-file-alt", label="Posts", identity="post"))
    admin.add_view(PostMetaView(PostMetaDB, icon="fas fa-tags", label="Post Meta", identity="post-meta"))

    admin.mount_to(app)
    logger.info("Admin panel mounted.")
