"""Application submission service.

Orchestrates the pipeline for one submission: validation -> recipient
resolution -> transport check -> mail composition (including MIME
rendering) -> delivery.
"""

import logging
from collections.abc import Mapping

from src.applications.composer import ComposedMessage, compose_message
from src.applications.models import UploadedFile
from src.applications.validator import resolve_recipient, validate_submission
from src.integrations.smtp.transport import SMTPTransport

logger = logging.getLogger(__name__)


class SubmissionService:
    """Validates an application and emails it to the location's recipient.

    Nothing is retried: validation errors, configuration errors and transport
    errors propagate to the caller unchanged.
    """

    def __init__(self, transport: SMTPTransport, fallback_email: str | None = None) -> None:
        """Initialize the service.

        Args:
            transport: Mail transport used for verification and delivery
            fallback_email: Recipient for locations without a dedicated inbox
        """
        self.transport = transport
        self.fallback_email = fallback_email

    async def submit(
        self,
        fields: Mapping[str, str | None],
        documents: Mapping[str, UploadedFile],
    ) -> ComposedMessage:
        """Process one application.

        Args:
            fields: Scalar form values keyed by wire name
            documents: Attached files keyed by document kind name

        Returns:
            The message that was delivered

        Raises:
            SubmissionError: If the applicant input is invalid
            ConfigurationError: If no recipient or credentials are configured
            TransportError: If the SMTP server is unreachable or rejects the message
        """
        submission = validate_submission(fields, documents)
        recipient = resolve_recipient(submission.location, self.fallback_email)

        await self.transport.verify()

        message = compose_message(
            submission,
            recipient=recipient,
            sender_address=self.transport.sender_address,
        )
        email_message = message.to_email_message()

        await self.transport.send(email_message)

        logger.info(
            f"Application for {submission.position!r} delivered to {recipient} "
            f"with {len(message.attachments)} document(s)"
        )
        return message
