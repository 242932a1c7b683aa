"""
Exception handlers for the app.

Routes (and the dependencies they use) raise ForumNoticesException subclasses and leave
the response to these handlers: JSON for /api/ paths, the error page for everything else.
Each failure is logged here, not in the routes.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from forum_notices.exceptions import ContentTypeNotFoundError, ForumNoticesException, PostNotFoundError
from forum_notices.frontend_routes.core import templates

logger = logging.getLogger(__name__)

# exception class -> (type given in JSON responses, message for the error page or None to use exc.message)
ERROR_RESPONSES: dict[type[ForumNoticesException], tuple[str, str | None]] = {
    PostNotFoundError: ("post_not_found_error", None),
    ContentTypeNotFoundError: ("content_type_not_found_error", "The page you are looking for does not exist."),
}


def is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def render_error_page(request: Request, message: str, status_code: int):
    return templates.TemplateResponse(
        request=request,
        name="error.html",
        context={"request": request, "error_message": message, "status_code": status_code},
        status_code=status_code,
    )


async def forum_notices_exception_handler(request: Request, exc: ForumNoticesException):
    error_type, page_message = ERROR_RESPONSES.get(type(exc), ("forum_notices_error", None))
    logger.warning(f"{type(exc).__name__} for {request.method} {request.url.path}: {exc.message}")

    if is_api_request(request):
        return JSONResponse(
            content={"detail": exc.message, "type": error_type},
            status_code=exc.status_code,
            headers=exc.headers,
        )
    return render_error_page(request, message=page_message or exc.message, status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Type error ignored, see https://github.com/fastapi/fastapi/discussions/11741"""
    app.add_exception_handler(ForumNoticesException, forum_notices_exception_handler)  # type: ignore
