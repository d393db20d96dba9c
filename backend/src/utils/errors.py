"""Application error types and the single error responder.

Every failure in the request pipeline is raised as one of the AppError
variants below. ``error_response_body`` is the only place that turns an
error into the client-visible JSON shape.
"""

import traceback
from typing import Any

DEFAULT_ERROR_MESSAGE = "Internal Server Error"


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Submitted data is incomplete (400)."""


class NotFoundError(AppError):
    """No route or asset matches the request (404)."""

    @classmethod
    def for_path(cls, path: str) -> "NotFoundError":
        return cls(f"Can't find {path} on this server!")


class InternalError(AppError):
    """The document store or an unexpected fault failed the request (500)."""


class NotificationError(AppError):
    """The record was saved but the email could not be delivered (500)."""


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response_body(
    exc: BaseException, include_stack: bool = False
) -> tuple[int, dict[str, Any]]:
    """Map an error to its status code and JSON body.

    Client errors carry status "fail", server errors carry status "error".

    Args:
        exc: Raised exception (AppError variant or anything else)
        include_stack: Attach the formatted traceback (development only)

    Returns:
        Tuple of (status_code, body)
    """
    match exc:
        case ValidationError(message=message):
            status_code, status, text = 400, "fail", message
        case NotFoundError(message=message):
            status_code, status, text = 404, "fail", message
        case NotificationError(message=message) | InternalError(message=message):
            status_code, status, text = 500, "error", message
        case AppError(message=message):
            status_code, status, text = 500, "error", message
        case _:
            status_code, status, text = 500, "error", DEFAULT_ERROR_MESSAGE

    body: dict[str, Any] = {
        "success": False,
        "status": status,
        "message": text or DEFAULT_ERROR_MESSAGE,
    }
    if include_stack:
        body["stack"] = _format_stack(exc)
    return status_code, body
