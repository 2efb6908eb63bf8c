"""Module entrypoint for the landing dev server.

    python -m landing_server

Loads ``.env`` (or the file named by ``ENV_FILE``) without overriding
variables already set, builds the settings once and serves the app with
uvicorn on ``HOST``:``PORT`` (default port 3000).
"""

from __future__ import annotations

import logging

import uvicorn

from .config import load_settings
from .logging_config import setup_logging
from .server import create_app


log = logging.getLogger("landing_server")


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)

    app = create_app(settings)

    log.info("Local server running: http://localhost:%d", settings.port)
    log.info("Payments provider in use: %s", settings.payments.provider)
    log.info("Serving static files from %s", settings.static_root)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
