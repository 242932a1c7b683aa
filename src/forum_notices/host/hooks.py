"""
The host's hook system, which is how plugins extend the app.

There are two kinds of hooks, sharing one handler table keyed by HostEvent:
- actions: fired with do_action (or render, for actions that output markup) at fixed points
  of the app's lifecycle and request handling.
- filters: fired with apply_filters, each callback receives the current value and returns the new one.

Callbacks run in ascending priority, callbacks with the same priority run in the order they were added.
Exceptions raised by a callback are not caught, they propagate to whoever fired the hook.
"""

import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable

from markupsafe import Markup

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


class HostEvent(StrEnum):
    """
    Every hook the host fires.

    The arguments each hook is fired with are listed per hook, db is always a sqlalchemy Session.
    """

    # actions
    PLUGINS_LOADED = "plugins_loaded"  # (context)
    INIT = "init"  # ()
    POST_SUBMITBOX_START = "post_submitbox_start"  # (db, post) -> markup
    SAVE_POST = "save_post"  # (db, post_id, form)
    BEFORE_FORUMS_INDEX = "bbp_template_before_forums_index"  # (db) -> markup
    BEFORE_SINGLE_FORUM = "bbp_template_before_single_forum"  # (db) -> markup
    BEFORE_SINGLE_TOPIC = "bbp_template_before_single_topic"  # (db) -> markup

    # filters
    POST_UPDATED_MESSAGES = "post_updated_messages"  # (messages)
    NOTICES_QUERY_ARGS = "bbp_notices_query_args"  # (query)
    NOTICES_LANGUAGES = "bbp_notices_languages"  # (languages_dir)
    PLUGIN_LOCALE = "plugin_locale"  # (locale, text_domain)


@dataclass(frozen=True)
class HookHandler:
    callback: Callable[..., Any]
    priority: int
    order: int = field(compare=False)


class HookRegistry:
    """Table of callbacks registered per HostEvent."""

    def __init__(self) -> None:
        self._handlers: dict[HostEvent, list[HookHandler]] = defaultdict(list)
        self._counter = itertools.count()

    def add_action(self, event: HostEvent, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        """
        Register a callback for an event.

        Adding the same callback twice with the same priority is a no-op,
        so a plugin set up twice does not run twice.
        """
        for handler in self._handlers[event]:
            if handler.callback == callback and handler.priority == priority:
                logger.debug(f"Callback {callback!r} already registered on {event} with priority {priority}")
                return
        self._handlers[event].append(HookHandler(callback=callback, priority=priority, order=next(self._counter)))

    def add_filter(self, event: HostEvent, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        """Register a filter callback, which gets the value being filtered as its first argument."""
        self.add_action(event=event, callback=callback, priority=priority)

    def remove_hook(self, event: HostEvent, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> bool:
        """Remove a callback. Returns False if it was not registered with that priority."""
        for handler in self._handlers[event]:
            if handler.callback == callback and handler.priority == priority:
                self._handlers[event].remove(handler)
                return True
        return False

    def has_hook(self, event: HostEvent, callback: Callable[..., Any] | None = None) -> bool:
        """Check if anything (or the given callback) is registered for the event."""
        if callback is None:
            return bool(self._handlers[event])
        return any(handler.callback == callback for handler in self._handlers[event])

    def callbacks(self, event: HostEvent) -> list[Callable[..., Any]]:
        """Callbacks for the event in the order they will be run."""
        handlers = sorted(self._handlers[event], key=lambda handler: (handler.priority, handler.order))
        return [handler.callback for handler in handlers]

    def do_action(self, event: HostEvent, *args: Any) -> None:
        """Run every callback registered for the event, return values are ignored."""
        logger.debug(f"Firing action: {event}")
        for callback in self.callbacks(event):
            callback(*args)

    def apply_filters(self, event: HostEvent, value: Any, *args: Any) -> Any:
        """Pass the value through every callback registered for the event and return the result."""
        for callback in self.callbacks(event):
            value = callback(value, *args)
        return value

    def render(self, event: HostEvent, *args: Any) -> Markup:
        """
        Run every callback registered for the event and join their output.

        Callbacks return Markup (or None when they have nothing to output).
        Plain strings are escaped, only Markup is inserted into the page as is.
        """
        logger.debug(f"Rendering action: {event}")
        fragments = [callback(*args) for callback in self.callbacks(event)]
        return Markup("").join(fragment for fragment in fragments if fragment)
