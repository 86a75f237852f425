"""Email notifications for batch reports via SMTP."""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from typing import Mapping, NamedTuple

logger = logging.getLogger(__name__)


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("true", "1", "yes")


class EmailConfig(NamedTuple):
    """SMTP configuration for the report mail."""

    smtp_host: str
    smtp_port: int
    username: str
    password: str
    from_address: str
    to_address: str
    use_ssl: bool = False


def get_email_config_from_env(environ: Mapping[str, str]) -> EmailConfig | None:
    """Load email configuration from environment variables.

    Required:
        EMAIL_HOST: SMTP server hostname

    Optional:
        EMAIL_PORT: SMTP port (default 587)
        EMAIL_SECURE: Connect with implicit TLS instead of STARTTLS (default false)
        EMAIL_USER / EMAIL_PASS: SMTP login, skipped when either is missing
        EMAIL_FROM: From address (default EMAIL_USER)
        EMAIL_TO: Recipient (default EMAIL_USER)
    """
    host = (environ.get("EMAIL_HOST") or "").strip()
    if not host:
        return None

    port_str = environ.get("EMAIL_PORT") or "587"
    try:
        port = int(port_str)
    except ValueError:
        logger.warning("Invalid EMAIL_PORT value: %s", port_str)
        return None

    username = environ.get("EMAIL_USER", "")
    from_address = environ.get("EMAIL_FROM") or username
    to_address = environ.get("EMAIL_TO") or username
    if not from_address or not to_address:
        logger.warning("EMAIL_HOST is set but no sender/recipient could be determined")
        return None

    return EmailConfig(
        smtp_host=host,
        smtp_port=port,
        username=username,
        password=environ.get("EMAIL_PASS", ""),
        from_address=from_address,
        to_address=to_address,
        use_ssl=_as_bool(environ.get("EMAIL_SECURE")),
    )


class EmailNotifier:
    """Sends plain-text mails. A notifier without config is a logged no-op."""

    def __init__(self, config: EmailConfig | None) -> None:
        self.config = config

    @property
    def enabled(self) -> bool:
        return self.config is not None

    def send(self, subject: str, body_text: str) -> bool:
        """Send a message to the configured recipient.

        Returns:
            True if the message was handed to the SMTP server, False otherwise.
            Never raises for SMTP or network failures.
        """
        if self.config is None:
            logger.info("Email configuration missing. Skipping email notification.")
            return False

        msg = MIMEText(body_text, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.config.from_address
        msg["To"] = self.config.to_address

        try:
            context = ssl.create_default_context()
            if self.config.use_ssl:
                connection = smtplib.SMTP_SSL(self.config.smtp_host, self.config.smtp_port, context=context)
            else:
                connection = smtplib.SMTP(self.config.smtp_host, self.config.smtp_port)

            with connection as server:
                if not self.config.use_ssl:
                    server.starttls(context=context)
                server.ehlo()
                if self.config.username and self.config.password:
                    server.login(self.config.username, self.config.password)
                server.sendmail(self.config.from_address, [self.config.to_address], msg.as_string())
            logger.info("Email sent successfully to %s", self.config.to_address)
            return True
        except smtplib.SMTPException as exc:
            logger.error("Failed to send email to %s: %s", self.config.to_address, exc)
            return False
        except OSError as exc:
            logger.error("Network error sending email to %s: %s", self.config.to_address, exc)
            return False
