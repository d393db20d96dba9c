"""Email service for delivering feedback notifications over SMTP."""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from services.email_renderer import RenderedEmail

logger = logging.getLogger(__name__)


class EmailService:
    """Sends rendered notification emails to the company mailbox.

    Delivery is attempted exactly once; callers decide what a failure means.
    """

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        username: str | None,
        password: str | None,
        recipient: str | None,
        sender_name: str = "Hyundai Feedback",
        timeout: float | None = None,
    ):
        """Initialize email service.

        Args:
            smtp_host: Mail relay host
            smtp_port: Mail relay port (STARTTLS)
            username: Account identity, also used as the From address
            password: Account credential
            recipient: Destination mailbox
            sender_name: Display name of the From header
            timeout: Socket timeout in seconds, None for no timeout
        """
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username
        self.password = password
        self.recipient = recipient
        self.sender_name = sender_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "EmailService":
        return cls(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            username=settings.company_email,
            password=settings.email_pass,
            recipient=settings.recipient,
            sender_name=settings.email_sender_name,
            timeout=settings.smtp_timeout,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password and self.recipient)

    def build_message(self, email: RenderedEmail) -> EmailMessage:
        """Build a multipart message with plain-text and HTML bodies."""
        message = EmailMessage()
        message["Subject"] = email.subject
        message["From"] = formataddr((self.sender_name, self.username or ""))
        message["To"] = self.recipient or ""
        message.set_content(email.text)
        message.add_alternative(email.html, subtype="html")
        return message

    def _connect(self) -> smtplib.SMTP:
        if self.timeout is None:
            return smtplib.SMTP(self.smtp_host, self.smtp_port)
        return smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout)

    def send(self, email: RenderedEmail) -> None:
        """Send an email to the configured recipient.

        Raises:
            RuntimeError: If the mail account is not configured
            smtplib.SMTPException: On SMTP errors
            OSError: If the relay cannot be reached
        """
        if not self.is_configured:
            raise RuntimeError("Mail account is not configured")

        message = self.build_message(email)
        with self._connect() as server:
            server.starttls()
            server.login(self.username, self.password)
            server.send_message(message)

        logger.info("Sent notification email: %s", email.subject)

    def verify(self) -> bool:
        """Check that the relay accepts the configured credentials.

        Returns:
            True if login succeeded
        """
        if not self.is_configured:
            logger.warning("Mail account not configured, notifications will fail")
            return False

        try:
            with self._connect() as server:
                server.starttls()
                server.login(self.username, self.password)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email transporter error: %s", e)
            return False

        logger.info("Email server ready to send messages")
        return True
