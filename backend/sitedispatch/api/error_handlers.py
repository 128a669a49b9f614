"""Error Handlers: last-resort exception handlers around the dispatch endpoint.

Invariants:
    - The dispatcher already converts handler faults; these fire only if the
      HTTP shell itself fails (rendering, app state)
    - Response is always the plain-text 500 body: never leaks internal details
    - A fault while serving one request never affects the next

Design Decisions:
    - Two-layer handler: domain (SiteDispatchError) and catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from sitedispatch.core.errors import SiteDispatchError
from sitedispatch.services.fallbacks import SERVER_ERROR_TEXT

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_sitedispatch_error_handler(app)
    _register_generic_error_handler(app)


def _register_sitedispatch_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SiteDispatchError)
    async def sitedispatch_error_handler(request: Request, exc: SiteDispatchError):
        logger.error(
            f"SiteDispatchError: {exc.message}",
            extra={**exc.to_log_extra(), "path": request.url.path},
        )
        return _internal_error()


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return _internal_error()


def _internal_error() -> PlainTextResponse:
    return PlainTextResponse(
        SERVER_ERROR_TEXT, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
