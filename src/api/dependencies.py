"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends

from src.config import Settings, get_settings
from src.integrations.smtp.transport import SMTPTransport
from src.services.submission import SubmissionService


def get_mail_transport(settings: Annotated[Settings, Depends(get_settings)]) -> SMTPTransport:
    """Dependency to get a mail transport built from settings."""
    return SMTPTransport.from_settings(settings)


def get_submission_service(
    transport: Annotated[SMTPTransport, Depends(get_mail_transport)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SubmissionService:
    """Dependency to get the submission service."""
    return SubmissionService(transport, fallback_email=settings.fallback_email)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
MailTransportDep = Annotated[SMTPTransport, Depends(get_mail_transport)]
SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]
