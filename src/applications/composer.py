"""Mail composition for validated applications."""

import re
from email.message import EmailMessage
from email.utils import formataddr

from pydantic import BaseModel, Field

from src.applications.models import ApplicantSubmission, DocumentKind

DEFAULT_SENDER_NAME = "Job Applications"

_LINE_BREAKS = re.compile(r"[\r\n]+")


def header_safe(value: str) -> str:
    """Collapse line breaks so applicant text stays on one header line."""
    return _LINE_BREAKS.sub(" ", value).strip()


class Attachment(BaseModel):
    """A file attached to the outgoing email."""

    filename: str
    content: bytes = Field(repr=False)
    content_type: str = "application/octet-stream"


class ComposedMessage(BaseModel):
    """Transport-independent representation of an application email."""

    sender: str
    to: str
    subject: str
    body: str
    attachments: list[Attachment] = Field(default_factory=list)

    def to_email_message(self) -> EmailMessage:
        """Render as a MIME message ready for SMTP delivery."""
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = self.to
        message["Subject"] = self.subject
        message.set_content(self.body)

        for attachment in self.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            if not subtype:
                maintype, subtype = "application", "octet-stream"
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )

        return message


def build_body(submission: ApplicantSubmission) -> str:
    """Plain-text summary of the applicant and which documents were sent."""
    lines = [
        "Job Application Details:",
        "",
        f"Candidate Name: {submission.full_name}",
        f"Email: {submission.email}",
        f"Phone: {submission.phone or 'Not provided'}",
        f"Position: {submission.position}",
        f"Location: {submission.location}",
        "",
        "Documents Submitted:",
    ]
    for kind in DocumentKind:
        submitted = "Yes" if submission.has_document(kind) else "No"
        lines.append(f"- {kind.label}: {submitted}")

    return "\n".join(lines) + "\n"


def build_attachments(submission: ApplicantSubmission) -> list[Attachment]:
    """One attachment per submitted document, prefixed with its kind."""
    return [
        Attachment(
            filename=header_safe(f"{kind.value}_{file.filename}"),
            content=file.content,
            content_type=file.content_type or "application/octet-stream",
        )
        for kind, file in submission.attached_documents()
    ]


def compose_message(
    submission: ApplicantSubmission,
    recipient: str,
    sender_address: str,
    sender_name: str = DEFAULT_SENDER_NAME,
) -> ComposedMessage:
    """Build the email delivered to the location's HR inbox."""
    return ComposedMessage(
        sender=formataddr((sender_name, sender_address)),
        to=recipient,
        subject=header_safe(f"New Application for {submission.position} - {submission.location}"),
        body=build_body(submission),
        attachments=build_attachments(submission),
    )
