"""
The forum system: forums, and topics posted in those forums.

Plugins extending the forums check the host context for a forum system before doing anything,
as it can be turned off in the settings (FORUM_ENABLED).
"""

from forum_notices.host.content_types import ContentTypeArgs, ContentTypeLabels, ContentTypeRegistry

FORUM_POST_TYPE = "forum"
TOPIC_POST_TYPE = "topic"


class ForumSystem:
    """Registers the forum content types and defines the capabilities needed to manage forums."""

    forum_post_type = FORUM_POST_TYPE
    topic_post_type = TOPIC_POST_TYPE

    def get_forum_caps(self) -> dict[str, str]:
        """Capabilities needed to manage forums, keyed by the generic capability they replace."""
        return {
            "edit_posts": "edit_forums",
            "edit_others_posts": "edit_others_forums",
            "publish_posts": "publish_forums",
            "read_private_posts": "read_private_forums",
            "read_hidden_posts": "read_hidden_forums",
            "delete_posts": "delete_forums",
            "delete_others_posts": "delete_others_forums",
        }

    def get_topic_caps(self) -> dict[str, str]:
        return {
            "edit_posts": "edit_topics",
            "edit_others_posts": "edit_others_topics",
            "publish_posts": "publish_topics",
            "read_private_posts": "read_private_topics",
            "read_hidden_posts": "read_hidden_topics",
            "delete_posts": "delete_topics",
            "delete_others_posts": "delete_others_topics",
        }

    def register_post_types(self, content_types: ContentTypeRegistry) -> None:
        content_types.register_post_type(
            self.forum_post_type,
            ContentTypeArgs(
                labels=ContentTypeLabels(
                    name="Forums",
                    singular_name="Forum",
                    add_new_item="Create New Forum",
                    edit_item="Edit Forum",
                    new_item="New Forum",
                    all_items="All Forums",
                    view_item="View Forum",
                    search_items="Search Forums",
                    not_found="No forums found",
                    not_found_in_trash="No forums found in Trash",
                ),
                public=True,
                capability_type=("forum", "forums"),
                capabilities=self.get_forum_caps(),
            ),
        )
        content_types.register_post_type(
            self.topic_post_type,
            ContentTypeArgs(
                labels=ContentTypeLabels(
                    name="Topics",
                    singular_name="Topic",
                    add_new_item="Create New Topic",
                    edit_item="Edit Topic",
                    new_item="New Topic",
                    all_items="All Topics",
                    view_item="View Topic",
                    search_items="Search Topics",
                    not_found="No topics found",
                    not_found_in_trash="No topics found in Trash",
                ),
                public=True,
                capability_type=("topic", "topics"),
                capabilities=self.get_topic_caps(),
            ),
        )
