"""Server-side validation of application submissions.

Field errors short-circuit on the first missing field; document errors are
aggregated.
"""

from collections.abc import Mapping

from src.applications.models import (
    ALLOWED_CONTENT_TYPES,
    LOCATION_EMAILS,
    MAX_DOCUMENT_SIZE,
    REQUIRED_DOCUMENTS,
    REQUIRED_FIELDS,
    ApplicantSubmission,
    DocumentKind,
    UploadedFile,
)


class SubmissionError(Exception):
    """Base class for submissions rejected because of applicant input."""


class MissingFieldError(SubmissionError):
    """Raised when a required form field is absent or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class MissingDocumentsError(SubmissionError):
    """Raised when one or more required documents are not attached."""

    def __init__(self, kinds: list[DocumentKind]):
        self.kinds = kinds
        names = ", ".join(kind.value for kind in kinds)
        super().__init__(f"Missing required documents: {names}")


class InvalidDocumentError(SubmissionError):
    """Raised when an attached document violates the file policy."""

    def __init__(self, kind: DocumentKind, reason: str):
        self.kind = kind
        self.reason = reason
        super().__init__(reason)


class ConfigurationError(Exception):
    """Raised when the service is not configured to deliver applications."""


def file_policy_violation(kind: DocumentKind | str, file: UploadedFile) -> str | None:
    """Return why a file is not acceptable for the given kind, or None.

    The type is accepted by declared content type, or by extension when the
    client sent a generic content type.
    """
    name = kind.value if isinstance(kind, DocumentKind) else kind
    allowed_extensions = set(ALLOWED_CONTENT_TYPES.values())

    if file.content_type not in ALLOWED_CONTENT_TYPES and file.extension not in allowed_extensions:
        return f"Only PDF, DOC, and DOCX files are allowed for {name}"

    if file.size > MAX_DOCUMENT_SIZE:
        return f"File size should be less than 5MB for {name}"

    return None


def check_document(kind: DocumentKind, file: UploadedFile) -> None:
    """Re-enforce the upload policy the form applies on selection.

    Raises:
        InvalidDocumentError: If the file type or size is not allowed
    """
    reason = file_policy_violation(kind, file)
    if reason:
        raise InvalidDocumentError(kind, reason)


def validate_submission(
    fields: Mapping[str, str | None],
    documents: Mapping[str, UploadedFile],
) -> ApplicantSubmission:
    """Build an ApplicantSubmission from raw form fields and attached files.

    Args:
        fields: Scalar form values keyed by wire name (fullName, email, ...)
        documents: Attached files keyed by document kind name

    Returns:
        The validated submission

    Raises:
        MissingFieldError: For the first required field that is missing
        MissingDocumentsError: Listing every missing required document
        InvalidDocumentError: If an attached file violates the file policy
    """
    for field in REQUIRED_FIELDS:
        if not fields.get(field):
            raise MissingFieldError(field)

    missing = [kind for kind in REQUIRED_DOCUMENTS if kind.value not in documents]
    if missing:
        raise MissingDocumentsError(missing)

    attached: dict[DocumentKind, UploadedFile] = {}
    for kind in DocumentKind:
        file = documents.get(kind.value)
        if file is None:
            continue
        check_document(kind, file)
        attached[kind] = file

    return ApplicantSubmission(
        full_name=fields["fullName"],
        email=fields["email"],
        phone=fields.get("phone") or "",
        position=fields["position"],
        location=fields["location"],
        documents=attached,
    )


def resolve_recipient(location: str, fallback: str | None) -> str:
    """Find the inbox that receives applications for a location.

    Raises:
        ConfigurationError: If the location is unknown and no fallback is set
    """
    recipient = LOCATION_EMAILS.get(location) or fallback
    if not recipient:
        raise ConfigurationError(
            f"No recipient for location {location!r} and FALLBACK_EMAIL is not set"
        )
    return recipient
