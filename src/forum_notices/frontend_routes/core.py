"""
Frontend routes for core pages, and the templates instance shared by all frontend routes.
"""

from pathlib import Path

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

fr_core_router = APIRouter()

templates_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=templates_dir.resolve())


@fr_core_router.get("/")
def get_home_page():
    """The forums index is the home page."""
    return RedirectResponse(url="/forums/", status_code=status.HTTP_302_FOUND)
