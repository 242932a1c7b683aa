"""
The host context: everything plugins need to extend the app, built once at startup.

The context is passed explicitly to whatever needs it (plugins get it on the plugins_loaded hook,
routes get it through the get_host_context dependency), there is no global instance.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request

from forum_notices.api_config import Settings
from forum_notices.host.content_types import BUILTIN_POST_TYPE, ContentTypeArgs, ContentTypeLabels, ContentTypeRegistry
from forum_notices.host.forum import ForumSystem
from forum_notices.host.hooks import HookRegistry
from forum_notices.host.i18n import TextDomainRegistry

logger = logging.getLogger(__name__)


@dataclass
class HostContext:
    """
    plugins holds the instance of each plugin that has been set up, by plugin name.
    forum is None when the forum system is disabled.
    """

    settings: Settings
    hooks: HookRegistry
    content_types: ContentTypeRegistry
    text_domains: TextDomainRegistry
    forum: ForumSystem | None = None
    plugins: dict[str, Any] = field(default_factory=dict)

    @property
    def locale(self) -> str:
        return self.settings.i18n.locale


def build_host_context(settings: Settings) -> HostContext:
    """Create the host context and register the built in content types."""
    content_types = ContentTypeRegistry()
    content_types.register_post_type(
        BUILTIN_POST_TYPE,
        ContentTypeArgs(labels=ContentTypeLabels(name="Posts", singular_name="Post"), public=True),
    )

    forum = None
    if settings.forum.enabled:
        forum = ForumSystem()
        forum.register_post_types(content_types)
    else:
        logger.info("Forum system disabled, forum content types not registered.")

    return HostContext(
        settings=settings,
        hooks=HookRegistry(),
        content_types=content_types,
        text_domains=TextDomainRegistry(),
        forum=forum,
    )


def get_host_context(request: Request) -> HostContext:
    """Dependency to get the host context of the running app. To be used in FastAPI endpoints."""
    return request.app.state.host
