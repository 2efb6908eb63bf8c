"""Error taxonomy for the dev server.

Every error carries the HTTP status it maps to. Handlers raise these; the
payments router and the static server turn them into responses, so nothing
escapes to crash the process.
"""

from __future__ import annotations

from typing import Any


class ServerError(Exception):
    """Base class for errors that end a single request."""

    status_code: int = 500
    default_message: str = "Внутренняя ошибка сервера"

    def __init__(self, message: str | None = None) -> None:
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)

    def as_error(self) -> dict[str, Any]:
        return {"error": self.message}


class PathTraversalViolation(ServerError):
    """Resolved static path would leave the root directory."""

    status_code = 403
    default_message = "Forbidden"


class NotFound(ServerError):
    status_code = 404
    default_message = "Файл не найден"


class RouteNotFound(NotFound):
    """No payments API route matches the request."""

    default_message = "Маршрут не найден"


class ValidationError(ServerError):
    """Request body is well-formed but its fields are not acceptable."""

    status_code = 400
    default_message = "Некорректные параметры запроса"


class ParseError(ServerError):
    """Request body is not well-formed JSON."""

    status_code = 400
    default_message = "Некорректный JSON в теле запроса"


def error_from_exception(exc: Exception) -> dict[str, Any]:
    """Convert an unexpected exception into the JSON error shape.

    Details stay in the log; the client only sees the generic message.
    """

    if isinstance(exc, ServerError):
        return exc.as_error()
    return {"error": ServerError.default_message}
