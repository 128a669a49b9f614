"""Process entry point: bind the configured port, announce routes, serve.

Invariants:
    - The startup notice is logged only after the socket is bound
    - uvicorn logs go through our root handler (log_config=None)
"""

import logging

import uvicorn

from sitedispatch.config import get_settings
from sitedispatch.infrastructure.observability import setup_logging
from sitedispatch.main import create_app
from sitedispatch.services.site import startup_notice

logger = logging.getLogger("sitedispatch")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app = create_app(settings)

    config = uvicorn.Config(
        app, host=settings.host, port=settings.port, log_config=None,
    )
    sock = config.bind_socket()
    logger.info(startup_notice(app.state.site, settings.host, settings.port))
    uvicorn.Server(config).run(sockets=[sock])


if __name__ == "__main__":
    main()
