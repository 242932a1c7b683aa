"""
The web app for Forum Notices: the forums, the admin edit screens and the admin panel.
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from forum_notices.admin_panel import register_admin_panel
from forum_notices.api_config import settings
from forum_notices.db import create_all_tables, engine, health_check_db
from forum_notices.exception_handlers import register_exception_handlers
from forum_notices.frontend_routes.core import fr_core_router
from forum_notices.frontend_routes.editor import fr_editor_router
from forum_notices.frontend_routes.forums import fr_forums_router, fr_topics_router
from forum_notices.host.context import build_host_context
from forum_notices.host.plugin_loader import boot_host

logging.basicConfig(level=settings.api.log_level, handlers=[logging.StreamHandler(sys.stdout)])

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager that handles startup and shutdown of the app"""
    # startup
    logger.info("Starting up Forum Notices...")

    settings.validate_api_settings()
    logger.info("All settings are correctly set.")

    if not health_check_db():
        raise ConnectionError("Could not connect to the database or db unhealthy. Exiting...")
    logger.info("Database connection healthy.")
    create_all_tables()

    host = build_host_context(settings)
    boot_host(host)
    app.state.host = host
    logger.info("Forum Notices startup events complete.")

    yield

    # cleanup
    logger.info("Shutting down, closing any DB connections")
    engine.dispose()


app = FastAPI(lifespan=lifespan, title="Forum Notices", docs_url="/api/docs")

app.include_router(fr_core_router, prefix="", include_in_schema=False)
app.include_router(fr_forums_router, prefix="/forums", include_in_schema=False)
app.include_router(fr_topics_router, prefix="/topics", include_in_schema=False)
app.include_router(fr_editor_router, prefix="/edit", include_in_schema=False)

register_exception_handlers(app)
register_admin_panel(app=app, engine=engine)

static_dir_path = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=static_dir_path), name="static")


@app.get("/api/health")
def health():
    return {"status": "ok"}


def main():
    uvicorn.run("forum_notices.app:app", host="127.0.0.1", port=8000, reload=True)


if __name__ == "__main__":
    main()
