"""Render feedback notification emails."""

from dataclasses import dataclass
from datetime import datetime
from html import escape
from itertools import zip_longest

from models.feedback import Feedback
from utils.constants import FEEDBACK_QUESTIONS, NOT_ANSWERED

TIMESTAMP_FORMAT = "%d/%m/%Y, %I:%M:%S %p %Z"


@dataclass(frozen=True)
class RenderedEmail:
    """Subject and bodies of a notification email."""

    subject: str
    html: str
    text: str


def pair_answers(
    answers: list[str | None], questions: tuple[str, ...] = FEEDBACK_QUESTIONS
) -> list[tuple[str, str]]:
    """Pair each question with its answer by position.

    Missing or empty answers become "Not Answered"; answers beyond the last
    question are dropped.
    """
    pairs = []
    for question, answer in zip_longest(questions, answers[: len(questions)]):
        pairs.append((question, answer or NOT_ANSWERED))
    return pairs


def format_submitted_at(submitted_at: datetime) -> str:
    return submitted_at.strftime(TIMESTAMP_FORMAT).strip()


def render_feedback_email(
    feedback: Feedback, questions: tuple[str, ...] = FEEDBACK_QUESTIONS
) -> RenderedEmail:
    """Build the notification email for a stored feedback record.

    Args:
        feedback: Persisted feedback record
        questions: Ordered question list

    Returns:
        RenderedEmail with subject, HTML body and plain-text body
    """
    pairs = pair_answers(feedback.answers, questions)
    submitted_on = format_submitted_at(feedback.submitted_at_datetime)

    # headers may not contain CR/LF
    subject = " ".join(f"New Feedback from {feedback.name} ({feedback.vehicle})".split())

    items = "".join(
        f"<li><b>{escape(question)}</b><br/>Answer: {escape(answer)}</li>"
        for question, answer in pairs
    )
    html = (
        "<h2>Hyundai Customer Feedback</h2>"
        f"<p><b>Name:</b> {escape(feedback.name)}</p>"
        f"<p><b>Vehicle No:</b> {escape(feedback.vehicle)}</p>"
        f"<p><b>Phone:</b> {escape(feedback.phone)}</p>"
        "<hr/>"
        "<h3>Feedback Summary</h3>"
        f"<ol>{items}</ol>"
        f"<p>Submitted on: {escape(submitted_on)}</p>"
    )

    lines = [
        "Hyundai Customer Feedback",
        "",
        f"Name: {feedback.name}",
        f"Vehicle No: {feedback.vehicle}",
        f"Phone: {feedback.phone}",
        "",
        "Feedback Summary",
    ]
    for index, (question, answer) in enumerate(pairs, start=1):
        lines.append(f"{index}. {question}")
        lines.append(f"   Answer: {answer}")
    lines.append("")
    lines.append(f"Submitted on: {submitted_on}")

    return RenderedEmail(subject=subject, html=html, text="\n".join(lines))
