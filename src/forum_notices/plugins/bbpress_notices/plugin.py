"""
bbPress Notices: lets site admins display notices at the top of forums and topics
to alert readers of important messages.

Notices are posts of their own content type (bbp_notice), managed from the forum admin menu.
Each notice has a type (default, info or error) stored as post meta, which is used as a
css class when the notice is shown.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup
from sqlalchemy.orm import Session

from forum_notices.crud.posts import delete_post_meta, get_post_meta, get_post_type, get_posts, update_post_meta
from forum_notices.host.content_types import ContentTypeArgs, ContentTypeLabels
from forum_notices.host.context import HostContext
from forum_notices.host.formatting import autop
from forum_notices.host.hooks import HookRegistry, HostEvent
from forum_notices.models.posts import PostDB, PostStatus
from forum_notices.schemas.posts import PostQuery

logger = logging.getLogger(__name__)

PLUGIN_NAME = "bbpress-notices"
TEXT_DOMAIN = "bbpress-notices"

NOTICE_POST_TYPE = "bbp_notice"
NOTICE_TYPE_META_KEY = "_bbp_notice_type"
NOTICE_TYPE_FIELD = "bbp_notice_type"
NOTICE_CSS_CLASS = "bbp-template-notice"

# (submitted value, label). "0" is the Default option, which clears the stored type.
NOTICE_TYPE_OPTIONS = [("0", "Default"), ("info", "Info"), ("error", "Error")]

LANGUAGES_DIR = Path(__file__).parent / "languages"

templates = Environment(loader=FileSystemLoader(Path(__file__).parent / "templates"), autoescape=True)

NOTICE_RENDER_HOOKS = [
    HostEvent.BEFORE_FORUMS_INDEX,
    HostEvent.BEFORE_SINGLE_FORUM,
    HostEvent.BEFORE_SINGLE_TOPIC,
]


def _is_empty(value: Any) -> bool:
    """Submitted form values count as empty if missing, blank or "0"."""
    return value is None or str(value) in ("", "0")


class NoticesPlugin:
    """
    Hook callbacks of the plugin.

    Only one instance should exist per host context, use load_notices_plugin to get it.
    """

    def __init__(self, context: HostContext):
        self.context = context
        self.hooks = context.hooks

    def actions(self) -> None:
        """Add all hooks we need."""
        self.hooks.add_action(HostEvent.INIT, self.load_textdomain)
        self.hooks.add_action(HostEvent.INIT, self.register_type)
        self.hooks.add_filter(HostEvent.POST_UPDATED_MESSAGES, self.save_messages)
        self.hooks.add_action(HostEvent.POST_SUBMITBOX_START, self.render_type_control)
        self.hooks.add_action(HostEvent.SAVE_POST, self.persist_type)

        for event in NOTICE_RENDER_HOOKS:
            self.hooks.add_action(event, self.render_notices)

    def _(self, text: str) -> str:
        return self.context.text_domains.translate(text, TEXT_DOMAIN)

    def _x(self, text: str, context: str) -> str:
        return self.context.text_domains.translate_with_context(text, context, TEXT_DOMAIN)

    def load_textdomain(self) -> None:
        """
        Load the plugin's translations. Catalogs are looked for in order:
        1. The global languages dir: <LANGUAGES_DIR>/bbpress-notices/bbpress-notices-<locale>.mo
        2. The plugin's languages dir: languages/bbpress-notices-<locale>.mo
        3. The default gettext layout in the plugin's languages dir.
        """
        lang_dir = Path(self.hooks.apply_filters(HostEvent.NOTICES_LANGUAGES, LANGUAGES_DIR))
        locale = self.hooks.apply_filters(HostEvent.PLUGIN_LOCALE, self.context.locale, TEXT_DOMAIN)
        mofile = f"{TEXT_DOMAIN}-{locale}.mo"

        mofile_local = lang_dir / mofile
        global_dir = self.context.settings.i18n.global_languages_path
        mofile_global = global_dir / TEXT_DOMAIN / mofile if global_dir else None

        text_domains = self.context.text_domains
        if mofile_global and mofile_global.is_file():
            text_domains.load_textdomain(TEXT_DOMAIN, mofile_global)
        elif mofile_local.is_file():
            text_domains.load_textdomain(TEXT_DOMAIN, mofile_local)
        else:
            text_domains.load_default_textdomain(TEXT_DOMAIN, languages_dir=lang_dir, locale=locale)

    def register_type(self) -> None:
        """Register the notice content type, if the forum system is available."""
        forum = self.context.forum
        if forum is None:
            logger.info(f"Forum system not active, not registering content type: {NOTICE_POST_TYPE}")
            return

        labels = ContentTypeLabels(
            name=self._x("Notices", "post type general name"),
            singular_name=self._x("Notice", "post type singular name"),
            add_new=self._("Add New"),
            add_new_item=self._("Add New Notice"),
            edit_item=self._("Edit Notice"),
            new_item=self._("New Notice"),
            all_items=self._("Notices"),
            view_item=self._("View Notice"),
            search_items=self._("Search Notices"),
            not_found=self._("No Notices found"),
            not_found_in_trash=self._("No Notices found in Trash"),
            parent_item_colon="",
            menu_name=self._("Notices"),
        )
        args = ContentTypeArgs(
            labels=labels,
            public=False,
            show_ui=True,
            show_in_menu=forum.forum_post_type,
            query_var=False,
            rewrite=False,
            capabilities=forum.get_forum_caps(),
            capability_type=("forum", "forums"),
            supports=["editor", "title"],
            can_export=False,
        )
        self.context.content_types.register_post_type(NOTICE_POST_TYPE, args)

    def save_messages(self, messages: Mapping[str, Mapping[int, str]]) -> dict[str, Mapping[int, str]]:
        """Add the notice messages shown after a notice is saved, keyed by message code."""
        return {
            **messages,
            NOTICE_POST_TYPE: {
                1: self._("Notice updated."),
                4: self._("Notice updated."),
                6: self._("Notice published."),
                7: self._("Notice saved."),
                8: self._("Notice submitted."),
            },
        }

    def render_type_control(self, db: Session, post: PostDB | None) -> Markup | None:
        """Add the "Type" drop down to the submit box of the notice edit screen."""
        if not isinstance(post, PostDB):
            return None
        if post.post_type != NOTICE_POST_TYPE:
            return None

        notice_type = get_post_meta(db=db, post_id=post.id, meta_key=NOTICE_TYPE_META_KEY)
        template = templates.get_template("type_control.html")
        return Markup(
            template.render(
                label=self._("Type:"),
                field_name=NOTICE_TYPE_FIELD,
                options=[(value, self._(label)) for value, label in NOTICE_TYPE_OPTIONS],
                selected=notice_type,
            )
        )

    def persist_type(self, db: Session, post_id: int, form: Mapping[str, Any]) -> None:
        """
        Save the submitted notice type.

        Any non empty value is stored as is, an empty value removes the stored type.
        """
        if get_post_type(db=db, post_id=post_id) != NOTICE_POST_TYPE:
            return

        notice_type = form.get(NOTICE_TYPE_FIELD)
        if not _is_empty(notice_type):
            update_post_meta(db=db, post_id=post_id, meta_key=NOTICE_TYPE_META_KEY, meta_value=str(notice_type))
            logger.info(f"Notice type set for notice {post_id}: {notice_type}")
        else:
            delete_post_meta(db=db, post_id=post_id, meta_key=NOTICE_TYPE_META_KEY)
            logger.info(f"Notice type cleared for notice {post_id}")

    def render_notices(self, db: Session) -> Markup | None:
        """Show all published notices, each wrapped in a div with its type as css class."""
        notices = self.get_notices(db)
        if not notices:
            return None

        template = templates.get_template("notice.html")
        fragments = []
        for notice in notices:
            notice_type = get_post_meta(db=db, post_id=notice.id, meta_key=NOTICE_TYPE_META_KEY)
            fragments.append(
                template.render(css_class=NOTICE_CSS_CLASS, notice_type=notice_type, content=autop(notice.content))
            )
        return Markup("").join(Markup(fragment) for fragment in fragments)

    def get_notices(self, db: Session) -> list[PostDB]:
        """All published notices. The query can be changed with the bbp_notices_query_args filter."""
        query = PostQuery(post_type=NOTICE_POST_TYPE, post_status=PostStatus.PUBLISH, nopaging=True)
        query = self.hooks.apply_filters(HostEvent.NOTICES_QUERY_ARGS, query)
        return get_posts(db=db, query=query)


def load_notices_plugin(context: HostContext) -> NoticesPlugin:
    """
    Set up the plugin for the host context, once.
    Runs on plugins_loaded with a late priority so the forum system is ready first.
    """
    plugin = context.plugins.get(PLUGIN_NAME)
    if plugin is None:
        plugin = NoticesPlugin(context)
        plugin.actions()
        context.plugins[PLUGIN_NAME] = plugin
        logger.info(f"Plugin set up: {PLUGIN_NAME}")
    return plugin


def activate(hooks: HookRegistry) -> None:
    hooks.add_action(HostEvent.PLUGINS_LOADED, load_notices_plugin, priority=999)
