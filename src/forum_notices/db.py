"""
Handles connection between the app and the database.
"""

import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from forum_notices.api_config import settings
from forum_notices.models import Base

logger = logging.getLogger(__name__)


DATABASE_URL = settings.database.url.get_secret_value()

# sync routes and their dependencies can run on different threadpool threads within one request.
CONNECT_ARGS = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# NOTE: The creation of the SessionLocal should only occur once, when the module is loaded.
# AKA: Do not refactor to have these in functions.
engine = create_engine(
    url=DATABASE_URL,
    echo=settings.database.echo_db_output,
    pool_pre_ping=True,
    connect_args=CONNECT_ARGS,
)
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """Dependency to get database session. To be used in FastAPI endpoints."""
    with SessionLocal() as session:
        try:
            yield session
        finally:
            session.close()


def health_check_db() -> bool:
    """Check if the database connection is healthy."""
    try:
        with engine.begin() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def create_all_tables() -> None:
    """Create any missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created (if missing).")
