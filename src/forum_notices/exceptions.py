"""
Forum Notices custom exceptions.

All exceptions in this module should inherit from ForumNoticesException, so we can catch for that externally.

Plugins do not raise these: a plugin that cannot act on a hook simply does nothing.
"""

from fastapi import status


class ForumNoticesException(Exception):
    """Base exception for all Forum Notices errors."""

    def __init__(self, message: str, status_code: int, headers: dict[str, str] | None = None):
        self.message = message
        self.status_code = status_code
        self.headers = headers or {}
        super().__init__(self.message)


class PostNotFoundError(ForumNoticesException):
    """Raised when a post (forum, topic, notice...) is requested that does not exist."""

    def __init__(self, post_id: int, message: str | None = None):
        self.post_id = post_id
        super().__init__(message=message or f"Post not found: '{post_id}'", status_code=status.HTTP_404_NOT_FOUND)


class ContentTypeNotFoundError(ForumNoticesException):
    """Raised when a content type is requested that has not been registered (or has no admin screens)."""

    def __init__(self, post_type: str):
        self.post_type = post_type
        message = f"Content type not registered or not editable: '{post_type}'"
        super().__init__(message=message, status_code=status.HTTP_404_NOT_FOUND)
