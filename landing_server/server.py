"""HTTP app and request dispatch for the landing dev server.

Every request passes through one middleware that classifies it:
  - OPTIONS under /api/payments: 204 preflight, answered directly.
  - anything else under /api/payments: FastAPI payments router.
  - everything else: static files from ``settings.static_root``.

Errors never escape as framework 500 pages: known errors map to their status,
unexpected ones are logged and answered with a JSON 500.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .dispatch import PAYMENTS_PREFIX, RouteKind, classify_request
from .errors import RouteNotFound, ServerError, error_from_exception
from .handlers import payments, static
from .providers import build_provider
from .responses import fail, preflight, with_cors


log = logging.getLogger("landing_server.server")


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="Landing Dev Server",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Read-only for the app's lifetime; handlers reach them via request.app.state.
    app.state.settings = settings
    app.state.payment_provider = build_provider(settings.payments)

    app.include_router(payments.router)

    @app.exception_handler(ServerError)
    async def _server_error(request: Request, exc: ServerError):
        return fail(exc.status_code, exc.as_error())

    @app.exception_handler(StarletteHTTPException)
    async def _routing_error(request: Request, exc: StarletteHTTPException):
        # Router misses (unknown path or unsupported method) under the payments
        # prefix all answer like an unknown route.
        if exc.status_code in (404, 405) and request.scope["path"].startswith(PAYMENTS_PREFIX):
            return fail(404, RouteNotFound().as_error())
        return await http_exception_handler(request, exc)

    @app.middleware("http")
    async def _dispatch(request: Request, call_next):
        # scope["path"] is already percent-decoded and has no query string.
        path = request.scope["path"]
        kind = classify_request(request.method, path)

        if kind is RouteKind.PREFLIGHT:
            return preflight()

        if kind is RouteKind.STATIC:
            return await static.serve_static(settings.static_root, path)

        try:
            response: Response = await call_next(request)
        except Exception as exc:  # noqa: BLE001
            log.exception("Unhandled error on %s %s", request.method, path)
            return fail(500, error_from_exception(exc))
        with_cors(response.headers)
        return response

    return app
