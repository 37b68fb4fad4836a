"""Job application submissions: models, validation and mail composition."""

from src.applications.composer import Attachment, ComposedMessage, compose_message
from src.applications.models import (
    JOB_POSITIONS,
    LOCATION_EMAILS,
    LOCATIONS,
    ApplicantSubmission,
    DocumentKind,
    UploadedFile,
)
from src.applications.validator import (
    ConfigurationError,
    InvalidDocumentError,
    MissingDocumentsError,
    MissingFieldError,
    SubmissionError,
    resolve_recipient,
    validate_submission,
)

__all__ = [
    # Models
    "ApplicantSubmission",
    "DocumentKind",
    "UploadedFile",
    "JOB_POSITIONS",
    "LOCATIONS",
    "LOCATION_EMAILS",
    # Validation
    "ConfigurationError",
    "InvalidDocumentError",
    "MissingDocumentsError",
    "MissingFieldError",
    "SubmissionError",
    "resolve_recipient",
    "validate_submission",
    # Composition
    "Attachment",
    "ComposedMessage",
    "compose_message",
]
