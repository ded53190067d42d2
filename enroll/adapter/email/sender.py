"""SMTP mail transport.

Uses aiosmtplib for asynchronous email sending via SMTP.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib
import logfire

from enroll.adapter.error import EmailDeliveryError
from enroll.config import EmailSettings
from enroll.domain.service.clients import EmailSender
from enroll.domain.value import Message


class SMTPSender(EmailSender):
    """Base class for mail transports.

    Provides type distinction for dependency injection.
    """

    pass


class SMTPEmailSender(SMTPSender):
    """Sends messages through an SMTP relay."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize the SMTP sender.

        Args:
            settings: Relay host, credentials and sender identity
        """
        self.settings = settings

    def _build(self, message: Message, address: str) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = f"{self.settings.from_name} <{self.settings.from_address}>"
        mime["To"] = address
        mime.attach(MIMEText(message.text, "plain"))
        return mime

    async def send(self, message: Message, address: str) -> None:
        """Send one message.

        Raises:
            EmailDeliveryError: If the relay cannot be reached or refuses
        """
        try:
            await aiosmtplib.send(
                self._build(message, address),
                hostname=self.settings.host,
                port=self.settings.port,
                username=self.settings.username or None,
                password=self.settings.password or None,
                start_tls=self.settings.use_tls,
            )
        except aiosmtplib.SMTPException as e:
            logfire.error(
                "Failed to send email via SMTP", host=self.settings.host, error=str(e)
            )
            raise EmailDeliveryError(f"Failed to send email to {address}: {e}")
        logfire.debug("Email sent", address=address, subject=message.subject)


class MockEmailSender(SMTPSender):
    """Records messages instead of sending them.

    Addresses in ``failing`` raise on send.
    """

    def __init__(self):
        self.outbox: list[tuple[str, Message]] = []
        self.failing: set[str] = set()

    async def send(self, message: Message, address: str) -> None:
        if address in self.failing:
            raise EmailDeliveryError(f"Failed to send email to {address} (mock)")
        self.outbox.append((address, message))

    def sent_to(self, address: str) -> list[Message]:
        return [message for to, message in self.outbox if to == address]
