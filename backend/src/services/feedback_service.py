"""Service for collecting, storing and forwarding customer feedback."""

import logging
from datetime import UTC, datetime
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from ulid import ULID

from models.feedback import Feedback, FeedbackSubmission
from services.email_renderer import render_feedback_email
from services.email_service import EmailService
from utils.constants import NOTIFICATION_FAILED_MESSAGE, SAVE_FAILED_MESSAGE
from utils.errors import InternalError, NotificationError

logger = logging.getLogger(__name__)


class FeedbackService:
    """Runs the submission pipeline: validate, persist, render, notify."""

    def __init__(self, table, email_service: EmailService):
        """Initialize the feedback service.

        Args:
            table: DynamoDB table for feedback submissions
            email_service: Sender for notification emails
        """
        self.table = table
        self.email_service = email_service

    def check_store(self) -> None:
        """Describe the feedback table, raising if it is unreachable."""
        self.table.load()
        logger.info("Feedback table %s is available", self.table.name)

    def save_feedback(self, submission: FeedbackSubmission) -> Feedback:
        """Persist a submission as a new feedback record.

        Args:
            submission: Validated submission

        Returns:
            Stored Feedback record

        Raises:
            InternalError: If the write fails
        """
        feedback = Feedback(
            feedback_id=str(ULID()),
            name=submission.name,
            vehicle=submission.vehicle,
            phone=submission.phone,
            answers=submission.answers,
            submitted_at=datetime.now(UTC).isoformat(),
        )

        try:
            self.table.put_item(Item=feedback.model_dump())
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to save feedback from %s: %s", submission.name, e)
            raise InternalError(SAVE_FAILED_MESSAGE) from e

        logger.info(
            "Saved feedback %s for vehicle %s", feedback.feedback_id, feedback.vehicle
        )
        return feedback

    def notify(self, feedback: Feedback) -> None:
        """Email the rendered feedback summary to the company mailbox.

        Raises:
            NotificationError: If rendering or delivery fails; the record
                stays saved
        """
        try:
            email = render_feedback_email(feedback)
            self.email_service.send(email)
        except Exception as e:
            logger.error(
                "Email sending failed for feedback %s: %s", feedback.feedback_id, e
            )
            raise NotificationError(NOTIFICATION_FAILED_MESSAGE) from e

    def submit(self, payload: Any) -> Feedback:
        """Validate, persist and forward one submission.

        Args:
            payload: Decoded request body

        Returns:
            Stored Feedback record

        Raises:
            ValidationError: If required fields are missing (nothing stored)
            InternalError: If persistence fails (no email attempted)
            NotificationError: If the email fails after the record was stored
        """
        submission = FeedbackSubmission.from_payload(payload)
        feedback = self.save_feedback(submission)
        self.notify(feedback)
        return feedback
