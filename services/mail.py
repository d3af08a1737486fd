"""Outgoing e-mail for signup verification and password resets."""

from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Mapping

logger = logging.getLogger(__name__)


class MailService:
    """Minimal SMTP sender configured from the Flask config mapping."""

    def __init__(self, config: Mapping):
        self.smtp_server = config.get("MAIL_SERVER")
        self.smtp_port = int(config.get("MAIL_PORT", 587))
        self.smtp_user = config.get("MAIL_USERNAME")
        self.smtp_password = config.get("MAIL_PASSWORD")
        self.from_email = config.get("MAIL_FROM", "noreply@caustudy.com")
        self.use_tls = config.get("MAIL_USE_TLS", True)
        self.frontend_url = (config.get("FRONTEND_URL") or "").rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self.smtp_server)

    def send(self, to_email: str, subject: str, html_body: str, text_body: str | None = None) -> bool:
        """Send a message; returns False when it could not be delivered."""
        if not self.configured:
            logger.warning("Mail not configured. Would send %r to %s", subject, to_email)
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_email
        if text_body:
            msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send mail to %s: %s", to_email, exc)
            return False

        logger.info("Mail sent to %s: %s", to_email, subject)
        return True

    def send_signup_mail(self, email: str, user_id: str, token: str) -> bool:
        link = f"{self.frontend_url}/signup/verify?id={user_id}&token={token}"
        subject = "Confirm your study account"
        html_body = f"""
        <html>
        <body>
            <h2>Welcome!</h2>
            <p>Click the link below to confirm your university e-mail address.</p>
            <p><a href="{link}">Confirm my account</a></p>
            <p>The link expires in 24 hours.</p>
        </body>
        </html>
        """
        text_body = f"Confirm your account:\n{link}\n\nThe link expires in 24 hours."
        return self.send(email, subject, html_body, text_body)

    def send_password_reset_mail(self, email: str, token: str) -> bool:
        link = f"{self.frontend_url}/password/reset?token={token}"
        subject = "Reset your password"
        html_body = f"""
        <html>
        <body>
            <p>Use the link below to choose a new password.</p>
            <p><a href="{link}">Reset password</a></p>
        </body>
        </html>
        """
        return self.send(email, subject, html_body, f"Reset your password:\n{link}")
