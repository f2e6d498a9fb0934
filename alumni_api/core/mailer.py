"""
Email adapter for the alumni backend.

The default implementation uses SMTP, reading credentials from Settings.
Transport errors are not swallowed: callers see the smtplib exception.
"""

from __future__ import annotations

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import smtplib
import ssl
from typing import Protocol

import structlog

from .config import Settings, get_settings

logger = structlog.get_logger(__name__)


class Mailer(Protocol):
    """Mail capability consumed by the account services."""

    def send_activation_mail(self, to_email: str, link: str) -> None: ...

    def send_otp_code(self, to_email: str, code: int) -> None: ...


def _activation_html(link: str) -> str:
    return f"""
    <div>
        <h1>To activate your account follow the link</h1>
        <a href="{link}">{link}</a>
    </div>
    """


def _otp_html(code: int) -> str:
    return f"""
    <div>
        <h1>Enter the code in the application</h1>
        <div>Your confirmation code: {code}</div>
    </div>
    """


class SMTPMailer:
    """Sends account e-mails through the SMTP server configured in Settings."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def _configured(self) -> bool:
        s = self.settings
        return bool(s.smtp_host and s.smtp_user and s.smtp_password and s.smtp_from and s.smtp_port)

    def send_email(self, subject: str, to_email: str, html_body: str, text_body: str | None = None) -> bool:
        """
        Send an e-mail with plain and HTML parts.
        When SMTP is not configured, logs and returns False without sending.
        """
        settings = self.settings
        if not self._configured():
            logger.warning("smtp_not_configured", to=to_email, subject=subject)
            return False
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = settings.smtp_from
        msg["To"] = to_email
        msg.attach(MIMEText(text_body or html_body, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        port = settings.smtp_port or 465
        if port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        else:
            with smtplib.SMTP(settings.smtp_host, port) as server:
                server.ehlo()
                server.starttls(context=ssl.create_default_context())
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        logger.info("email_sent", to=to_email, subject=subject)
        return True

    def send_activation_mail(self, to_email: str, link: str) -> None:
        self.send_email(
            f"Account activation on {self.settings.api_url}",
            to_email,
            _activation_html(link),
            f"To activate your account open: {link}",
        )

    def send_otp_code(self, to_email: str, code: int) -> None:
        self.send_email(
            "Your confirmation code",
            to_email,
            _otp_html(code),
            f"Your confirmation code: {code}",
        )
