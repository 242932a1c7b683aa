from forum_notices.plugins.bbpress_notices.plugin import (
    NOTICE_POST_TYPE,
    NOTICE_TYPE_FIELD,
    NOTICE_TYPE_META_KEY,
    NoticesPlugin,
    activate,
    load_notices_plugin,
)

__all__ = [
    "NOTICE_POST_TYPE",
    "NOTICE_TYPE_FIELD",
    "NOTICE_TYPE_META_KEY",
    "NoticesPlugin",
    "activate",
    "load_notices_plugin",
]
