"""Shared models for job application submissions.

This module is shared between:
- Submission validation and mail composition (server side)
- The application form state machine (client side)
"""

from enum import Enum
from pathlib import PurePath
from types import MappingProxyType

from pydantic import BaseModel, Field


class DocumentKind(str, Enum):
    """Category of an uploaded document, in the order they are listed."""

    RESUME = "resume"
    DEGREE = "degree"
    ID_PROOF = "idProof"
    EXPERIENCE = "experience"
    CERTIFICATION_1 = "certification1"
    CERTIFICATION_2 = "certification2"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Human-readable name used in forms and email bodies."""
        return DOCUMENT_LABELS[self]

    @property
    def required(self) -> bool:
        """Whether every application must include this document."""
        return self in REQUIRED_DOCUMENTS


DOCUMENT_LABELS: dict[DocumentKind, str] = {
    DocumentKind.RESUME: "Resume/CV",
    DocumentKind.DEGREE: "Degree Certificate",
    DocumentKind.ID_PROOF: "ID Proof",
    DocumentKind.EXPERIENCE: "Experience Certificates",
    DocumentKind.CERTIFICATION_1: "Certification 1",
    DocumentKind.CERTIFICATION_2: "Certification 2",
    DocumentKind.OTHER: "Other Document",
}

REQUIRED_DOCUMENTS: tuple[DocumentKind, ...] = (
    DocumentKind.RESUME,
    DocumentKind.DEGREE,
    DocumentKind.ID_PROOF,
)

# Office location -> HR inbox receiving applications for it
LOCATION_EMAILS = MappingProxyType(
    {
        "Bala Cynwyd Office": "qwenton.balawejder@batp.org",
        "Philadelphia Office": "samantha.power@batp.org",
        "South Philadelphia Satellite Office": "williampower@batp.org",
    }
)

LOCATIONS: tuple[str, ...] = tuple(LOCATION_EMAILS)

JOB_POSITIONS: tuple[str, ...] = (
    "Behavior Consultant (BC)",
    "Mobile Therapist (MT)",
    "Registered Behavior Technician (RBT)",
    "Behavior Technician (BT)",
    "Administration",
)

# Wire names of the scalar form fields
FIELD_NAMES: tuple[str, ...] = ("fullName", "email", "phone", "position", "location")
REQUIRED_FIELDS: tuple[str, ...] = ("fullName", "email", "position", "location")

FIELD_LABELS: dict[str, str] = {
    "fullName": "Full Name",
    "email": "Email",
    "phone": "Phone Number",
    "position": "Job Position",
    "location": "Location",
}

ALLOWED_CONTENT_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}

MAX_DOCUMENT_SIZE = 5 * 1024 * 1024  # 5 MiB


class UploadedFile(BaseModel):
    """A document attached to an application."""

    filename: str
    content: bytes = Field(repr=False)
    content_type: str | None = None

    @property
    def size(self) -> int:
        """Size of the content in bytes."""
        return len(self.content)

    @property
    def extension(self) -> str:
        """Lower-cased filename extension without the dot."""
        return PurePath(self.filename).suffix.lower().lstrip(".")


class ApplicantSubmission(BaseModel):
    """A validated application, alive only for the duration of one request."""

    full_name: str
    email: str
    phone: str = ""
    position: str
    location: str
    documents: dict[DocumentKind, UploadedFile] = Field(default_factory=dict)

    def has_document(self, kind: DocumentKind) -> bool:
        """Check whether a document of the given kind was submitted."""
        return kind in self.documents

    def attached_documents(self) -> list[tuple[DocumentKind, UploadedFile]]:
        """Submitted documents ordered by document kind, not upload order."""
        return [(kind, self.documents[kind]) for kind in DocumentKind if kind in self.documents]
