"""Pytest configuration and shared fixtures."""

from unittest.mock import MagicMock, Mock

import pytest

from models.feedback import Feedback
from services.email_service import EmailService
from utils.settings import Settings


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        feedback_table="workshop-feedback-test",
        aws_default_region="us-west-2",
        company_email="workshop@example.com",
        email_pass="app-password",
        environment="production",
        static_dir=tmp_path / "no-public-dir",
    )


@pytest.fixture
def sample_answers():
    """One answer per question."""
    return ["Good"] * 18


@pytest.fixture
def sample_payload(sample_answers):
    """A complete feedback submission body."""
    return {
        "name": "A. Singh",
        "vehicle": "KA01AB1234",
        "phone": "9999999999",
        "answers": sample_answers,
    }


@pytest.fixture
def sample_feedback(sample_answers):
    """A stored feedback record."""
    return Feedback(
        feedback_id="01JAB3C4D5E6F7G8H9J0KMNPQR",
        name="A. Singh",
        vehicle="KA01AB1234",
        phone="9999999999",
        answers=sample_answers,
        submitted_at="2026-10-19T09:30:00+00:00",
    )


@pytest.fixture
def mock_dynamodb_table():
    """Create a mock DynamoDB table for testing."""
    mock_table = Mock()
    mock_table.name = "workshop-feedback-test"
    mock_table.put_item.return_value = {}
    mock_table.load.return_value = None
    return mock_table


@pytest.fixture
def mock_email_service():
    """Create a mock email service that accepts every message."""
    service = MagicMock(spec=EmailService)
    service.send.return_value = None
    service.verify.return_value = True
    return service
