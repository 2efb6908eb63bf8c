"""Response helpers shared by the dispatcher and the handlers.

Payments API responses are JSON with permissive CORS headers; static-file
errors are plain text.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping

from starlette.responses import JSONResponse, PlainTextResponse, Response


CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class JsonResponse(JSONResponse):
    """JSON response that declares its charset explicitly."""

    media_type = "application/json; charset=utf-8"


def with_cors(headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
    """Add the CORS headers to a header mapping in place."""

    for name, value in CORS_HEADERS.items():
        headers[name] = value
    return headers


def json_response(status_code: int, payload: Mapping[str, Any]) -> JsonResponse:
    return JsonResponse(dict(payload), status_code=status_code, headers=dict(CORS_HEADERS))


def ok(key: str, value: Any) -> JsonResponse:
    """Build a 200 response wrapping ``value`` under a single top-level key."""

    return json_response(200, {key: value})


def fail(status_code: int, error: Mapping[str, Any]) -> JsonResponse:
    return json_response(status_code, error)


def preflight() -> Response:
    """Empty 204 answer to a CORS preflight request."""

    return Response(status_code=204, headers=dict(CORS_HEADERS))


def plain_text(status_code: int, message: str) -> PlainTextResponse:
    # PlainTextResponse appends "; charset=utf-8" to text/plain.
    return PlainTextResponse(message, status_code=status_code)
