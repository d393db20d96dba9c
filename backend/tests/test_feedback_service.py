"""Tests for FeedbackService."""

import smtplib
from datetime import UTC, datetime

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from models.feedback import Feedback, FeedbackSubmission
from services.email_renderer import RenderedEmail
from services.feedback_service import FeedbackService
from utils.errors import InternalError, NotificationError, ValidationError


def _client_error(code="InternalServerError"):
    return ClientError(
        {"Error": {"Code": code, "Message": "store unavailable"}}, "PutItem"
    )


class TestFeedbackService:
    """Test cases for FeedbackService."""

    @pytest.fixture
    def service(self, mock_dynamodb_table, mock_email_service):
        """Create a FeedbackService with mocked table and mail sender."""
        return FeedbackService(
            table=mock_dynamodb_table, email_service=mock_email_service
        )

    # -----------------------------------------------------------------------
    # save_feedback
    # -----------------------------------------------------------------------

    def test_save_feedback_writes_one_item(self, service, mock_dynamodb_table, sample_payload):
        """Test that exactly one record is written with the submitted fields."""
        before = datetime.now(UTC)
        submission = FeedbackSubmission.from_payload(sample_payload)

        feedback = service.save_feedback(submission)

        mock_dynamodb_table.put_item.assert_called_once()
        item = mock_dynamodb_table.put_item.call_args.kwargs["Item"]
        assert item["name"] == "A. Singh"
        assert item["vehicle"] == "KA01AB1234"
        assert item["phone"] == "9999999999"
        assert item["answers"] == ["Good"] * 18
        assert item["feedback_id"] == feedback.feedback_id
        assert datetime.fromisoformat(item["submitted_at"]) >= before

    def test_save_feedback_assigns_unique_ids(self, service, sample_payload):
        submission = FeedbackSubmission.from_payload(sample_payload)

        first = service.save_feedback(submission)
        second = service.save_feedback(submission)

        assert first.feedback_id != second.feedback_id
        assert len(first.feedback_id) == 26

    def test_save_feedback_client_error(self, service, mock_dynamodb_table, sample_payload):
        """Test that a store fault becomes an InternalError."""
        mock_dynamodb_table.put_item.side_effect = _client_error()
        submission = FeedbackSubmission.from_payload(sample_payload)

        with pytest.raises(InternalError) as exc_info:
            service.save_feedback(submission)

        assert exc_info.value.message == "Failed to save feedback"
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_save_feedback_connection_error(self, service, mock_dynamodb_table, sample_payload):
        mock_dynamodb_table.put_item.side_effect = EndpointConnectionError(
            endpoint_url="https://dynamodb.us-west-2.amazonaws.com"
        )
        submission = FeedbackSubmission.from_payload(sample_payload)

        with pytest.raises(InternalError):
            service.save_feedback(submission)

    # -----------------------------------------------------------------------
    # notify
    # -----------------------------------------------------------------------

    def test_notify_sends_rendered_email(self, service, mock_email_service, sample_feedback):
        service.notify(sample_feedback)

        mock_email_service.send.assert_called_once()
        email = mock_email_service.send.call_args[0][0]
        assert isinstance(email, RenderedEmail)
        assert email.subject == "New Feedback from A. Singh (KA01AB1234)"

    def test_notify_failure_raises_notification_error(
        self, service, mock_email_service, sample_feedback
    ):
        """Test that delivery failures say the record was saved."""
        mock_email_service.send.side_effect = smtplib.SMTPServerDisconnected("gone")

        with pytest.raises(NotificationError) as exc_info:
            service.notify(sample_feedback)

        assert "saved" in exc_info.value.message
        assert "failed" in exc_info.value.message

    # -----------------------------------------------------------------------
    # submit
    # -----------------------------------------------------------------------

    def test_submit_success(self, service, mock_dynamodb_table, mock_email_service, sample_payload):
        feedback = service.submit(sample_payload)

        assert isinstance(feedback, Feedback)
        mock_dynamodb_table.put_item.assert_called_once()
        mock_email_service.send.assert_called_once()

    def test_submit_invalid_payload_writes_nothing(
        self, service, mock_dynamodb_table, mock_email_service, sample_payload
    ):
        """Test that validation happens before any persistence."""
        del sample_payload["phone"]

        with pytest.raises(ValidationError):
            service.submit(sample_payload)

        mock_dynamodb_table.put_item.assert_not_called()
        mock_email_service.send.assert_not_called()

    def test_submit_store_failure_skips_email(
        self, service, mock_dynamodb_table, mock_email_service, sample_payload
    ):
        """Test that no email is attempted when persistence fails."""
        mock_dynamodb_table.put_item.side_effect = _client_error()

        with pytest.raises(InternalError):
            service.submit(sample_payload)

        mock_email_service.send.assert_not_called()

    def test_submit_email_failure_keeps_record(
        self, service, mock_dynamodb_table, mock_email_service, sample_payload
    ):
        """Test that the write is not undone when the email fails."""
        mock_email_service.send.side_effect = OSError("relay unreachable")

        with pytest.raises(NotificationError):
            service.submit(sample_payload)

        mock_dynamodb_table.put_item.assert_called_once()
        mock_dynamodb_table.delete_item.assert_not_called()

    # -----------------------------------------------------------------------
    # check_store
    # -----------------------------------------------------------------------

    def test_check_store_describes_table(self, service, mock_dynamodb_table):
        service.check_store()

        mock_dynamodb_table.load.assert_called_once()

    def test_check_store_propagates_errors(self, service, mock_dynamodb_table):
        mock_dynamodb_table.load.side_effect = _client_error("ResourceNotFoundException")

        with pytest.raises(ClientError):
            service.check_store()
