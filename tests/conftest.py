"""Pytest configuration and fixtures."""

import os
from email.message import EmailMessage

import pytest

# Set test environment before settings are loaded
os.environ["APP_ENV"] = "development"
os.environ["EMAIL_HOST"] = "smtp.test.local"
os.environ["EMAIL_PORT"] = "587"
os.environ["EMAIL_USER"] = "careers@batp.org"
os.environ["EMAIL_PASSWORD"] = "test-password"
os.environ["FALLBACK_EMAIL"] = "hr@batp.org"

from src.applications.models import UploadedFile  # noqa: E402

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class FakeTransport:
    """In-memory stand-in for SMTPTransport."""

    def __init__(
        self,
        verify_error: Exception | None = None,
        send_error: Exception | None = None,
        sender_address: str = "careers@batp.org",
    ):
        self.verify_error = verify_error
        self.send_error = send_error
        self.sender_address = sender_address
        self.verify_calls = 0
        self.sent: list[EmailMessage] = []

    async def verify(self) -> None:
        self.verify_calls += 1
        if self.verify_error:
            raise self.verify_error

    async def send(self, message: EmailMessage) -> None:
        if self.send_error:
            raise self.send_error
        self.sent.append(message)


@pytest.fixture
def make_transport():
    """Factory for fake transports, optionally failing."""
    return FakeTransport


@pytest.fixture
def fake_transport():
    """A transport that records sent messages."""
    return FakeTransport()


@pytest.fixture
def make_file():
    """Factory for uploaded files."""

    def _make(
        filename: str = "document.pdf",
        content: bytes = PDF_BYTES,
        content_type: str | None = "application/pdf",
    ) -> UploadedFile:
        return UploadedFile(filename=filename, content=content, content_type=content_type)

    return _make


@pytest.fixture
def applicant_fields():
    """Complete scalar fields for a valid application."""
    return {
        "fullName": "Jane Doe",
        "email": "jane@x.com",
        "phone": "",
        "position": "RBT",
        "location": "Bala Cynwyd Office",
    }


@pytest.fixture
def required_documents(make_file):
    """The three required documents, keyed by document kind name."""
    return {
        "resume": make_file("cv.pdf"),
        "degree": make_file("degree.pdf"),
        "idProof": make_file("passport.docx", content_type=DOCX_TYPE),
    }
