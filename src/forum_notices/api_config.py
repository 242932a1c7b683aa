"""
Config for the Forum Notices app.

This module creates a single instance of the Settings class,
which other modules can import directly to access configuration settings.

Settings are defined by environment variables. For local development the defaults
give a working sqlite backed app with the forum system enabled.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import SecretStr

VALID_ENVIRONMENTS = ["local_dev", "test", "production"]


@dataclass
class APISettings:
    """App configuration settings."""

    environment: str = os.getenv("FORUM_NOTICES_ENV", "local_dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass
class DBSettings:
    """Database configuration settings."""

    url: SecretStr = SecretStr(os.getenv("DATABASE_URL", "sqlite:///./forum_notices.db"))
    echo_db_output: bool = bool(os.getenv("DB_ECHO", "False") == "True")  # anything but "True" is considered False


@dataclass
class ForumSettings:
    """
    Forum system settings.

    With the forum system disabled the host still runs, but forum content types are
    not registered and any plugin depending on the forum system skips its setup.
    """

    enabled: bool = bool(os.getenv("FORUM_ENABLED", "True") == "True")


@dataclass
class I18nSettings:
    """
    Localization settings.

    languages_dir is the global directory holding translation catalogs for all plugins,
    each plugin looks for its own catalogs in a sub folder named after its text domain.
    """

    locale: str = os.getenv("LOCALE", "en_US")
    languages_dir: str = os.getenv("LANGUAGES_DIR", "NOT_SET")

    @property
    def global_languages_path(self) -> Path | None:
        if self.languages_dir == "NOT_SET":
            return None
        return Path(self.languages_dir)


@dataclass
class Settings:
    """Configuration settings for the Forum Notices app."""

    api: APISettings = field(default_factory=APISettings)
    database: DBSettings = field(default_factory=DBSettings)
    forum: ForumSettings = field(default_factory=ForumSettings)
    i18n: I18nSettings = field(default_factory=I18nSettings)

    def validate_api_settings(self) -> None:
        """
        Validate the settings that cannot be given a sensible default.
        This is run on startup of the app, so later on in the codebase we can assume they are set.
        """
        if self.api.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"FORUM_NOTICES_ENV must be one of {VALID_ENVIRONMENTS}, got: {self.api.environment=}"
            )
        if not self.database.url.get_secret_value():
            raise ValueError("A required environment variable was not set: DATABASE_URL")
        if not self.i18n.locale:
            raise ValueError("A required environment variable was not set: LOCALE")
        if self.i18n.global_languages_path and not self.i18n.global_languages_path.is_dir():
            raise ValueError(f"LANGUAGES_DIR does not point to a directory: {self.i18n.languages_dir}")


# This instance can be imported and used throughout the application.
settings = Settings()
