"""Lambda and server handlers for the workshop feedback API."""

from .api_handler import api_handler, app, create_app

__all__ = ["api_handler", "app", "create_app"]
