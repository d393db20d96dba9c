"""Utility modules for the workshop feedback backend."""

from .errors import (
    AppError,
    InternalError,
    NotFoundError,
    NotificationError,
    ValidationError,
    error_response_body,
)

__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InternalError",
    "NotificationError",
    "error_response_body",
]
