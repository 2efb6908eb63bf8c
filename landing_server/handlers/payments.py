"""Payments mock API handlers.

Implements:
- GET  /api/payments/config
- POST /api/payments/session
- any other method/path under /api/payments -> 404 JSON

Handlers raise ``ServerError`` subclasses; the exception handler registered
in ``server.create_app`` turns them into ``{"error": ...}`` bodies.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..dispatch import PAYMENTS_PREFIX
from ..errors import ParseError, RouteNotFound
from ..models import SessionRequest
from ..providers import PaymentProvider
from ..responses import ok


log = logging.getLogger("landing_server.handlers.payments")

router = APIRouter(prefix=PAYMENTS_PREFIX)

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


async def read_json_body(request: Request) -> Any:
    """Collect the whole body and decode it; an empty body is ``{}``."""

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw.decode("utf-8"))
    # ValueError covers JSONDecodeError and the int max-digits limit;
    # RecursionError comes from pathologically deep nesting.
    except (UnicodeDecodeError, ValueError, RecursionError):
        raise ParseError() from None


@router.get("/config")
async def get_config(request: Request) -> JSONResponse:
    config = request.app.state.settings.payments
    return ok("config", config.as_dict())


@router.post("/session")
async def create_session(request: Request) -> JSONResponse:
    body = await read_json_body(request)
    session_request = SessionRequest.from_body(body)

    provider: PaymentProvider = request.app.state.payment_provider
    session = provider.create_session(session_request)
    log.info(
        "Created %s session %s: %s %s",
        provider.name,
        session.id,
        session.amount,
        session.currency,
    )
    return ok("session", session.as_dict())


# Registered last so the concrete routes above match first.
@router.api_route("{rest:path}", methods=_ALL_METHODS, include_in_schema=False)
async def unknown_route(rest: str, request: Request) -> JSONResponse:
    log.debug("No payments route for %s %s", request.method, request.url.path)
    raise RouteNotFound()
