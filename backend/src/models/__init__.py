"""Data models for the workshop feedback backend."""

from .feedback import ErrorResponse, Feedback, FeedbackResponse, FeedbackSubmission

__all__ = [
    "Feedback",
    "FeedbackSubmission",
    "FeedbackResponse",
    "ErrorResponse",
]
