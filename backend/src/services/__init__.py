"""Services for the workshop feedback backend."""

from .email_renderer import RenderedEmail, render_feedback_email
from .email_service import EmailService
from .feedback_service import FeedbackService

__all__ = [
    "EmailService",
    "FeedbackService",
    "RenderedEmail",
    "render_feedback_email",
]
