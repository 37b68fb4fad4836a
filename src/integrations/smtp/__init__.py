"""SMTP mail delivery."""

from src.integrations.smtp.transport import SMTPTransport, TransportError

__all__ = [
    "SMTPTransport",
    "TransportError",
]
