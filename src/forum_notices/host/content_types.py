"""
Registry of content types known to the host.

A content type is a named kind of post (e.g. "forum", "topic", "bbp_notice").
Registering one makes the admin screens (list, add new, edit) available for it
and controls where it appears in the admin menu.
"""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

BUILTIN_POST_TYPE = "post"


@dataclass
class ContentTypeLabels:
    """Labels shown in the admin screens of a content type."""

    name: str
    singular_name: str
    add_new: str = "Add New"
    add_new_item: str = "Add New Post"
    edit_item: str = "Edit Post"
    new_item: str = "New Post"
    all_items: str = "All Posts"
    view_item: str = "View Post"
    search_items: str = "Search Posts"
    not_found: str = "No posts found."
    not_found_in_trash: str = "No posts found in Trash."
    parent_item_colon: str = ""
    menu_name: str = ""

    def __post_init__(self):
        if not self.menu_name:
            self.menu_name = self.name


@dataclass
class ContentTypeArgs:
    """
    Options given when registering a content type.

    - show_ui: admin screens exist for the type. Defaults to the value of public.
    - show_in_menu: True for a top level admin menu entry, the name of another content type
      to be listed in that type's sub menu, or False for no menu entry at all.
    - query_var/rewrite: whether the type gets its own public urls. No content type
      currently has public urls of its own, these are kept for plugins to declare their intent.
    - capabilities: maps generic capabilities (edit_posts, delete_posts...) to the
      capabilities needed for this type.
    """

    labels: ContentTypeLabels
    public: bool = False
    show_ui: bool | None = None
    show_in_menu: bool | str = True
    query_var: bool | str = True
    rewrite: bool = True
    capability_type: tuple[str, str] = ("post", "posts")
    capabilities: dict[str, str] = field(default_factory=dict)
    supports: list[str] = field(default_factory=lambda: ["title", "editor"])
    can_export: bool = True

    def __post_init__(self):
        if self.show_ui is None:
            self.show_ui = self.public


@dataclass
class ContentType:
    name: str
    args: ContentTypeArgs

    @property
    def labels(self) -> ContentTypeLabels:
        return self.args.labels

    def supports(self, feature: str) -> bool:
        return feature in self.args.supports


class ContentTypeRegistry:
    """Content types registered with the host, by name."""

    def __init__(self) -> None:
        self._types: dict[str, ContentType] = {}

    def register_post_type(self, name: str, args: ContentTypeArgs) -> ContentType:
        """
        Register a content type.

        Names are unique: registering a name a second time keeps the first registration and returns it.
        """
        if name in self._types:
            logger.debug(f"Content type already registered, keeping existing registration: {name}")
            return self._types[name]

        content_type = ContentType(name=name, args=args)
        self._types[name] = content_type
        logger.info(f"Content type registered: {name}")
        return content_type

    def get(self, name: str) -> ContentType | None:
        return self._types.get(name)

    def exists(self, name: str) -> bool:
        return name in self._types

    def all(self) -> list[ContentType]:
        return list(self._types.values())

    def editable(self) -> list[ContentType]:
        """Content types with admin screens."""
        return [content_type for content_type in self._types.values() if content_type.args.show_ui]

    def top_level_menu(self) -> list[ContentType]:
        """Content types with their own top level admin menu entry."""
        return [content_type for content_type in self.editable() if content_type.args.show_in_menu is True]

    def submenu(self, parent: str) -> list[ContentType]:
        """Content types listed in the admin sub menu of the parent content type."""
        return [content_type for content_type in self.editable() if content_type.args.show_in_menu == parent]
