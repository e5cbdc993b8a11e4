"""Service for sending emails."""

import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from ..domain.ports.persistence import MailDispatcher

logger = logging.getLogger(__name__)


class EmailService(MailDispatcher):
    """Service for sending plain-text emails via SMTP."""

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
        from_email: str = "noreply@things-connect.net",
    ):
        self.smtp_host = smtp_host or ""
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username or ""
        self.smtp_password = smtp_password or ""
        self.from_email = from_email
        self.enabled = bool(self.smtp_host and self.smtp_username)

    def send_password_reset(self, to_email: str, reset_code: str, valid_minutes: int) -> bool:
        """
        Send a password reset code.

        Args:
            to_email: Recipient email
            reset_code: One-time reset code
            valid_minutes: Validity window mentioned in the message

        Returns:
            True if sent successfully, False otherwise
        """
        body = f"Your password reset key is: {reset_code}. It is valid for {valid_minutes} minutes."
        return self.send(to_email, "RESET PASSWORD", body)

    def send(self, to_email: str, subject: str, body: str) -> bool:
        """
        Send an email via SMTP.

        Returns:
            True if sent successfully, False otherwise
        """
        if not self.enabled:
            logger.info("SMTP not configured; mail to %s not sent (subject=%r)", to_email, subject)
            return True

        try:
            msg = MIMEText(body, "plain", "utf-8")
            msg["Subject"] = subject
            msg["From"] = self.from_email
            msg["To"] = to_email

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

            return True

        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send email to %s: %s", to_email, exc)
            return False
