"""SMTP mail transport for delivering application emails."""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage

from src.applications.validator import ConfigurationError
from src.config import Settings

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the SMTP server cannot be reached or rejects a message."""


class SMTPTransport:
    """Sends rendered messages through an authenticated SMTP server.

    Every call opens its own SMTP session. Blocking smtplib calls run in a
    worker thread.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        user: str | None = None,
        password: str | None = None,
        secure: bool = False,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the transport.

        Args:
            host: SMTP server hostname
            port: SMTP server port
            user: Login user, also used as sender address
            password: Login password
            secure: Use implicit TLS instead of upgrading with STARTTLS
            timeout: Socket timeout in seconds
        """
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.secure = secure
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SMTPTransport":
        """Create a transport from application settings."""
        return cls(
            host=settings.email_host,
            port=settings.email_port,
            user=settings.email_user,
            password=settings.email_password,
            secure=settings.email_secure,
            timeout=settings.email_timeout,
        )

    @property
    def sender_address(self) -> str:
        """Address messages are sent from."""
        self.ensure_configured()
        return self.user

    def ensure_configured(self) -> None:
        """Raise if sender credentials are missing."""
        if not self.user or not self.password:
            raise ConfigurationError("Email service is not properly configured.")

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()

        if self.secure:
            smtp: smtplib.SMTP = smtplib.SMTP_SSL(
                self.host, self.port, timeout=self.timeout, context=context
            )
        else:
            smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)

        try:
            smtp.ehlo()
            if not self.secure and smtp.has_extn("starttls"):
                smtp.starttls(context=context)
                smtp.ehlo()
            smtp.login(self.user, self.password)
        except (smtplib.SMTPException, OSError):
            smtp.close()
            raise

        return smtp

    def _verify_sync(self) -> None:
        with self._connect() as smtp:
            smtp.noop()

    def _send_sync(self, message: EmailMessage) -> None:
        with self._connect() as smtp:
            smtp.send_message(message)

    async def verify(self) -> None:
        """Check that the server is reachable and accepts our credentials.

        Raises:
            ConfigurationError: If credentials are missing
            TransportError: If the server cannot be reached or login fails
        """
        self.ensure_configured()
        try:
            await asyncio.to_thread(self._verify_sync)
        except (smtplib.SMTPException, OSError) as e:
            raise TransportError(f"SMTP verification failed for {self.host}:{self.port}: {e}") from e

        logger.debug(f"SMTP server {self.host}:{self.port} verified")

    async def send(self, message: EmailMessage) -> None:
        """Deliver a rendered MIME message.

        Raises:
            ConfigurationError: If credentials are missing
            TransportError: If delivery fails
        """
        self.ensure_configured()
        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            raise TransportError(f"Failed to send message to {message['To']}: {e}") from e

        attachments = sum(1 for _ in message.iter_attachments())
        logger.info(
            f"Sent '{message['Subject']}' to {message['To']} "
            f"with {attachments} attachment(s)"
        )
