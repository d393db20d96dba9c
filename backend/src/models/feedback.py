"""Feedback data models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from utils.errors import ValidationError

REQUIRED_TEXT_FIELDS = ("name", "vehicle", "phone")

INCOMPLETE_DATA_MESSAGE = "Incomplete data. All fields required."


def _coerce_answer(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FeedbackSubmission(BaseModel):
    """Validated customer feedback submission."""

    name: str
    vehicle: str
    phone: str
    answers: list[str | None]

    @classmethod
    def from_payload(cls, payload: Any) -> "FeedbackSubmission":
        """Build a submission from a raw request body.

        Only presence is checked: name, vehicle and phone must be non-empty
        strings and answers must be a non-empty value. Individual answers are
        not validated and the number of answers is not bounded.

        Args:
            payload: Decoded JSON body (anything, including None)

        Returns:
            FeedbackSubmission

        Raises:
            ValidationError: If any required field is missing or empty
        """
        if not isinstance(payload, dict):
            payload = {}

        for field in REQUIRED_TEXT_FIELDS:
            value = payload.get(field)
            if not isinstance(value, str) or not value:
                raise ValidationError(INCOMPLETE_DATA_MESSAGE)

        answers = payload.get("answers")
        if not answers:
            raise ValidationError(INCOMPLETE_DATA_MESSAGE)
        if not isinstance(answers, list | tuple):
            answers = [answers]

        return cls(
            name=payload["name"],
            vehicle=payload["vehicle"],
            phone=payload["phone"],
            answers=[_coerce_answer(answer) for answer in answers],
        )


class Feedback(BaseModel):
    """Stored feedback record."""

    feedback_id: str
    name: str
    vehicle: str
    phone: str
    answers: list[str | None]
    submitted_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())

    @property
    def submitted_at_datetime(self) -> datetime:
        return datetime.fromisoformat(self.submitted_at)


class FeedbackResponse(BaseModel):
    """Successful submission response."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Uniform error response body."""

    success: bool = False
    status: str
    message: str
    stack: str | None = None
