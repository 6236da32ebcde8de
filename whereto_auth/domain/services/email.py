"""Email service for sending password reset links."""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from whereto_auth import config

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Reset your WhereTo password"


class SmtpNotifier:
    """Delivers reset links over SMTP.

    With no SMTP user configured the link is logged instead (development).
    """

    def __init__(
        self,
        host: str = config.SMTP_HOST,
        port: int = config.SMTP_PORT,
        user: str = config.SMTP_USER,
        password: str = config.SMTP_PASSWORD,
        sender: str = config.EMAIL_FROM,
        ttl_minutes: int = config.RESET_TOKEN_TTL_MINUTES,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.ttl_minutes = ttl_minutes

    def build_reset_message(self, to_email: str, reset_url: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = RESET_SUBJECT
        msg["From"] = self.sender
        msg["To"] = to_email

        text_body = f"""
You requested a password reset for your WhereTo account.

Click the link below to reset your password (valid for {self.ttl_minutes} minutes):
{reset_url}

If you did not request this reset, you can safely ignore this email.

- WhereTo
"""

        html_body = f"""
<html>
<body>
<h2>Reset Your Password</h2>
<p>You requested a password reset for your WhereTo account.</p>
<p><a href="{reset_url}">Reset Password</a></p>
<p><small>This link will expire in {self.ttl_minutes} minutes.</small></p>
<p>If the link doesn't work, copy and paste this into your browser:<br>{reset_url}</p>
<p>If you didn't request this password reset, you can safely ignore this email.</p>
</body>
</html>
"""

        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))
        return msg

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.send_message(msg)

    async def send_password_reset_link(self, email: str, reset_url: str) -> bool:
        """Send password reset email with reset link.

        Returns True if email sent successfully, False otherwise.
        """
        if not self.user:
            logger.warning("[DEV] Password reset link for %s: %s", email, reset_url)
            return True

        msg = self.build_reset_message(email, reset_url)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError):
            logger.exception("Failed to send reset email to %s", email)
            return False
        return True
