"""Request classification.

Every request ends in exactly one of three branches, decided from the method
and the path alone (query string already stripped by the ASGI server).
"""

from __future__ import annotations

from enum import Enum


PAYMENTS_PREFIX = "/api/payments"


class RouteKind(str, Enum):
    PREFLIGHT = "preflight"
    PAYMENTS = "payments"
    STATIC = "static"


def classify_request(method: str, path: str) -> RouteKind:
    if path.startswith(PAYMENTS_PREFIX):
        if method.upper() == "OPTIONS":
            return RouteKind.PREFLIGHT
        return RouteKind.PAYMENTS
    return RouteKind.STATIC
