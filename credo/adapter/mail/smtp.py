"""SMTP mail sender.

smtplib is blocking, so delivery runs in a worker thread.
"""

import asyncio
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText

import logfire

from credo.adapter.error import MailDeliveryError
from credo.config import MailSettings
from credo.domain.service.mail_sender import MailSender


class SmtpMailSender(MailSender):
    """Delivers plain-text mail through an SMTP relay."""

    def __init__(self, settings: MailSettings) -> None:
        """Initialize SMTP sender.

        Args:
            settings: SMTP host, credentials and sender address
        """
        self.settings = settings

    def _build_message(self, to: str, subject: str, body: str) -> MIMEText:
        msg = MIMEText(body)
        msg["Subject"] = subject
        msg["From"] = self.settings.from_address
        msg["To"] = to
        return msg

    def _deliver(self, msg: MIMEText, to: str) -> None:
        with smtplib.SMTP(
            self.settings.host,
            self.settings.port,
            timeout=self.settings.timeout_seconds,
        ) as server:
            if self.settings.use_starttls:
                server.starttls()
            if self.settings.username and self.settings.password:
                server.login(self.settings.username, self.settings.password)
            server.sendmail(self.settings.from_address, [to], msg.as_string())

    async def send(self, to: str, subject: str, body: str) -> None:
        """Send a message.

        Raises:
            MailDeliveryError: If the relay refuses or is unreachable
        """
        msg = self._build_message(to, subject, body)
        try:
            await asyncio.to_thread(self._deliver, msg, to)
        except (smtplib.SMTPException, OSError) as e:
            logfire.error("SMTP delivery failed", host=self.settings.host, error=str(e))
            raise MailDeliveryError(f"Could not deliver mail: {e}") from e

        logfire.info("Mail sent", subject=subject)


@dataclass
class SentMail:
    """Message captured by the mock sender."""

    to: str
    subject: str
    body: str


class MockMailSender(MailSender):
    """Mock mail sender for testing.

    Records messages in ``outbox`` instead of sending them. Set ``fail``
    to simulate an unreachable relay.
    """

    def __init__(self) -> None:
        self.outbox: list[SentMail] = []
        self.fail = False

    async def send(self, to: str, subject: str, body: str) -> None:
        """Record the message."""
        if self.fail:
            raise MailDeliveryError("Mock relay unavailable")
        self.outbox.append(SentMail(to=to, subject=subject, body=body))
