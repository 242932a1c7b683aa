"""
Top-level pytest configuration for Forum Notices.

The app reads its settings from environment variables when forum_notices.api_config is first imported,
so they are set here before anything from forum_notices is imported.
Every test gets freshly created tables in a throwaway sqlite database.
"""

import os
import tempfile
from pathlib import Path

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="forum_notices_tests_")) / "test.db"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["FORUM_NOTICES_ENV"] = "test"
os.environ["FORUM_ENABLED"] = "True"
os.environ["LOCALE"] = "en_US"
os.environ.pop("LANGUAGES_DIR", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from forum_notices.api_config import Settings  # noqa: E402
from forum_notices.db import SessionLocal, engine  # noqa: E402
from forum_notices.host.context import HostContext, build_host_context  # noqa: E402
from forum_notices.host.plugin_loader import boot_host  # noqa: E402
from forum_notices.models import Base  # noqa: E402
from forum_notices.plugins.bbpress_notices.plugin import PLUGIN_NAME, NoticesPlugin  # noqa: E402


@pytest.fixture(autouse=True)
def clean_db():
    """Drop and recreate all tables before each test, so no test sees data from another."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def test_settings() -> Settings:
    """A fresh Settings instance, tests can change it without affecting the app wide settings."""
    return Settings()


@pytest.fixture
def host(test_settings) -> HostContext:
    """A booted host context with the forum system enabled."""
    context = build_host_context(test_settings)
    boot_host(context)
    return context


@pytest.fixture
def host_without_forum(test_settings) -> HostContext:
    """A booted host context with the forum system disabled."""
    test_settings.forum.enabled = False
    context = build_host_context(test_settings)
    boot_host(context)
    return context


@pytest.fixture
def notices_plugin(host) -> NoticesPlugin:
    return host.plugins[PLUGIN_NAME]


@pytest.fixture
def client():
    """TestClient for the app, entering it runs the lifespan so the host is booted."""
    from forum_notices.app import app

    with TestClient(app) as test_client:
        yield test_client
