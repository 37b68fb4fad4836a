"""End-to-end tests for the application submission endpoint."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_mail_transport
from src.applications.models import MAX_DOCUMENT_SIZE
from src.applications.validator import ConfigurationError
from src.integrations.smtp.transport import SMTPTransport, TransportError
from src.main import app

PDF = b"%PDF-1.4\n%%EOF\n"
URL = "/api/send-email"


@pytest.fixture
def transport(fake_transport):
    """Install the fake transport for the duration of a test."""
    app.dependency_overrides[get_mail_transport] = lambda: fake_transport
    yield fake_transport
    app.dependency_overrides.clear()


@pytest.fixture
def client(transport):
    """Test client bound to the app."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def form_data():
    """The end-to-end scenario's applicant fields."""
    return {
        "fullName": "Jane Doe",
        "email": "jane@x.com",
        "phone": "",
        "position": "RBT",
        "location": "Bala Cynwyd Office",
    }


def _documents(*kinds: str) -> dict[str, tuple[str, bytes, str]]:
    return {kind: (f"{kind}.pdf", PDF, "application/pdf") for kind in kinds}


REQUIRED = ("resume", "degree", "idProof")


def _filenames(message) -> list[str]:
    return [part.get_filename() for part in message.iter_attachments()]


def _body(message) -> str:
    return message.get_body(preferencelist=("plain",)).get_content()


class TestSuccessfulSubmission:
    """Tests for accepted applications."""

    def test_end_to_end(self, client, transport, form_data):
        """Test the full scenario with only the required documents."""
        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 200
        assert response.json() == {"success": True}

        assert len(transport.sent) == 1
        message = transport.sent[0]
        assert message["To"] == "qwenton.balawejder@batp.org"
        assert _filenames(message) == [
            "resume_resume.pdf",
            "degree_degree.pdf",
            "idProof_idProof.pdf",
        ]
        answers = [line.rsplit(": ", 1)[1] for line in _body(message).splitlines() if line.startswith("- ")]
        assert answers == ["Yes", "Yes", "Yes", "No", "No", "No", "No"]

    def test_philadelphia_recipient(self, client, transport, form_data):
        """Test routing to the Philadelphia office."""
        form_data["location"] = "Philadelphia Office"

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 200
        assert transport.sent[0]["To"] == "samantha.power@batp.org"

    def test_unknown_location_uses_fallback(self, client, transport, form_data):
        """Test routing of unrecognized locations to FALLBACK_EMAIL."""
        form_data["location"] = "Harrisburg Office"

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 200
        assert transport.sent[0]["To"] == "hr@batp.org"

    def test_attachment_count_matches_parts(self, client, transport, form_data):
        """Test that optional parts are attached too."""
        files = _documents(*REQUIRED, "experience", "certification2")

        response = client.post(URL, data=form_data, files=files)

        assert response.status_code == 200
        assert len(_filenames(transport.sent[0])) == 5

    def test_missing_phone_part(self, client, transport, form_data):
        """Test that the phone part may be omitted entirely."""
        del form_data["phone"]

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 200
        assert "Phone: Not provided" in _body(transport.sent[0])


class TestSmtpDelivery:
    """Tests for the endpoint with the SMTP transport and a mocked server."""

    @pytest.fixture
    def smtp(self):
        """SMTP session returned for every connection."""
        session = MagicMock()
        session.__enter__.return_value = session
        session.__exit__.return_value = False
        session.has_extn.return_value = True
        return session

    @pytest.fixture
    def smtp_client(self, smtp):
        """Test client whose transport talks to the mocked SMTP session."""
        transport = SMTPTransport(host="smtp.test.local", user="careers@batp.org", password="pw")
        app.dependency_overrides[get_mail_transport] = lambda: transport
        with patch("src.integrations.smtp.transport.smtplib.SMTP", return_value=smtp):
            with TestClient(app, raise_server_exceptions=False) as test_client:
                yield test_client
        app.dependency_overrides.clear()

    def test_delivers_mime_message(self, smtp_client, smtp, form_data):
        """Test that one message goes out after the reachability check."""
        response = smtp_client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 200
        smtp.noop.assert_called_once()
        smtp.send_message.assert_called_once()
        sent = smtp.send_message.call_args.args[0]
        assert sent["From"] == "Job Applications <careers@batp.org>"
        assert sent["Subject"] == "New Application for RBT - Bala Cynwyd Office"

    def test_line_breaks_in_position(self, smtp_client, smtp, form_data):
        """Test that a position with line breaks cannot add headers."""
        form_data["position"] = "RBT\r\nBcc: x@evil.com"

        response = smtp_client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 200
        sent = smtp.send_message.call_args.args[0]
        assert sent["Subject"] == "New Application for RBT Bcc: x@evil.com - Bala Cynwyd Office"
        assert sent["Bcc"] is None
        assert "Position: RBT" in _body(sent)

    def test_line_breaks_in_location(self, smtp_client, smtp, form_data):
        """Test that an unknown multi-line location is routed and kept on one line."""
        form_data["location"] = "Remote\nOffice"

        response = smtp_client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 200
        sent = smtp.send_message.call_args.args[0]
        assert sent["To"] == "hr@batp.org"
        assert sent["Subject"] == "New Application for RBT - Remote Office"


class TestValidationErrors:
    """Tests for 400 responses."""

    @pytest.mark.parametrize("field", ["fullName", "email", "position", "location"])
    def test_missing_field(self, client, transport, form_data, field):
        """Test that a missing field is named and nothing is sent."""
        del form_data[field]

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 400
        assert response.json() == {"error": f"Missing required field: {field}"}
        assert transport.verify_calls == 0
        assert transport.sent == []

    def test_empty_field(self, client, transport, form_data):
        """Test that empty strings count as missing."""
        form_data["position"] = ""

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 400
        assert "position" in response.json()["error"]

    def test_all_missing_documents_listed(self, client, transport, form_data):
        """Test that every missing document is named."""
        response = client.post(URL, data=form_data, files=_documents("degree"))

        assert response.status_code == 400
        error = response.json()["error"]
        assert "resume" in error
        assert "idProof" in error
        assert "degree" not in error
        assert transport.sent == []

    def test_oversized_document(self, client, transport, form_data):
        """Test that the size ceiling is enforced on the server."""
        files = _documents("degree", "idProof")
        files["resume"] = ("cv.pdf", b"0" * (MAX_DOCUMENT_SIZE + 1), "application/pdf")

        response = client.post(URL, data=form_data, files=files)

        assert response.status_code == 400
        assert response.json() == {"error": "File size should be less than 5MB for resume"}
        assert transport.sent == []

    def test_disallowed_document_type(self, client, transport, form_data):
        """Test that the type policy is enforced on the server."""
        files = _documents(*REQUIRED)
        files["other"] = ("photo.png", b"\x89PNG", "image/png")

        response = client.post(URL, data=form_data, files=files)

        assert response.status_code == 400
        assert response.json() == {"error": "Only PDF, DOC, and DOCX files are allowed for other"}


class TestProcessingFailures:
    """Tests for opaque 500 responses."""

    def test_unreachable_transport(self, client, transport, form_data):
        """Test a failing reachability check."""
        transport.verify_error = TransportError("connect to smtp.test.local:587 refused")

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process application"}
        assert transport.sent == []

    def test_missing_credentials(self, client, transport, form_data):
        """Test that configuration details are not disclosed."""
        transport.verify_error = ConfigurationError("Email service is not properly configured.")

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 500
        assert "configured" not in response.text

    def test_send_failure(self, client, transport, form_data):
        """Test a delivery failure."""
        transport.send_error = TransportError("550 mailbox unavailable")

        response = client.post(URL, data=form_data, files=_documents(*REQUIRED))

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process application"}
        assert "550" not in response.text

    def test_malformed_multipart(self, client, transport):
        """Test an unparseable body."""
        response = client.post(
            URL,
            content=b"not really multipart",
            headers={"Content-Type": "multipart/form-data"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process application"}
        assert transport.verify_calls == 0


class TestServiceEndpoints:
    """Tests for informational endpoints."""

    def test_root(self, client):
        """Test the root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "environment": "development",
            "email_configured": True,
        }
