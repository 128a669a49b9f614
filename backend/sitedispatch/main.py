"""sitedispatch: FastAPI application factory.

Invariants:
    - One RequestDispatcher per app, built from one frozen SiteConfig
    - The dispatch catch-all is the ONLY route; FastAPI docs/openapi are
      disabled so nothing shadows the pipeline
    - Error handlers registered before serving: nothing escapes as a traceback

Design Decisions:
    - Factory over module-level app: the static root is validated when the app
      is built, and tests build apps over temporary roots
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sitedispatch.api.error_handlers import register_error_handlers
from sitedispatch.api.routes.dispatch import register_dispatch_route
from sitedispatch.config import Settings, get_settings
from sitedispatch.core.protocols import FaultSink
from sitedispatch.infrastructure.observability import LoggingFaultSink, setup_logging
from sitedispatch.services.dispatcher import RequestDispatcher
from sitedispatch.services.site import SiteConfig, build_site

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"sitedispatch started, static root {app.state.site.static_root}")
    yield
    logger.info("sitedispatch shutting down")


def create_app(
    settings: Settings | None = None,
    *,
    site: SiteConfig | None = None,
    fault_sink: FaultSink | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    site = site or build_site(settings.static_root)

    app = FastAPI(
        title="sitedispatch", version="1.0.0", lifespan=lifespan,
        docs_url=None, redoc_url=None, openapi_url=None,
    )
    app.state.settings = settings
    app.state.site = site
    app.state.dispatcher = RequestDispatcher(site, fault_sink or LoggingFaultSink())

    register_error_handlers(app)
    register_dispatch_route(app)
    return app
