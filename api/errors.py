"""Global exception handlers for FastAPI.

Clients only ever see generic pages; details go to the server log.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import pages
from auth.exceptions import StoreError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return HTMLResponse(pages.not_found_page(), status_code=404)
        return HTMLResponse(
            pages.error_page(),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"Store unavailable on {request.method} {request.url.path}: {exc}")
        return HTMLResponse(pages.error_page(), status_code=500)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return HTMLResponse(pages.error_page(), status_code=500)
