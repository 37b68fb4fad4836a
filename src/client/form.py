"""Application form state machine.

The form moves through Idle -> Submitting -> Success | Error. Success and
Error fall back to Idle on the next edit. All transitions go through
``reduce`` so the form can be driven by any front end (CLI, tests, UI
bindings) without duplicating its rules.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from src.applications.models import (
    ALLOWED_CONTENT_TYPES,
    FIELD_LABELS,
    FIELD_NAMES,
    MAX_DOCUMENT_SIZE,
    REQUIRED_DOCUMENTS,
    REQUIRED_FIELDS,
    DocumentKind,
    UploadedFile,
)

SUBMIT_FAILED_MESSAGE = "An error occurred. Please try again."


class FormStatus(str, Enum):
    """Lifecycle of the application form."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


def _empty_fields() -> dict[str, str]:
    return {name: "" for name in FIELD_NAMES}


def _empty_files() -> dict[DocumentKind, UploadedFile | None]:
    return {kind: None for kind in DocumentKind}


@dataclass(frozen=True)
class FormState:
    """Snapshot of everything the applicant has entered."""

    fields: dict[str, str] = field(default_factory=_empty_fields)
    files: dict[DocumentKind, UploadedFile | None] = field(default_factory=_empty_files)
    status: FormStatus = FormStatus.IDLE
    error: str = ""
    # Server or network reason behind a failed submission; error stays generic
    detail: str = ""

    @property
    def is_submitting(self) -> bool:
        return self.status == FormStatus.SUBMITTING

    def missing_labels(self) -> list[str]:
        """Labels of every required field and document not yet provided."""
        missing = [FIELD_LABELS[name] for name in REQUIRED_FIELDS if not self.fields.get(name)]
        missing.extend(kind.label for kind in REQUIRED_DOCUMENTS if self.files.get(kind) is None)
        return missing

    def selected_files(self) -> list[tuple[DocumentKind, UploadedFile]]:
        """Currently selected files in document kind order."""
        return [(kind, file) for kind in DocumentKind if (file := self.files.get(kind)) is not None]


# Actions


@dataclass(frozen=True)
class EditField:
    name: str
    value: str


@dataclass(frozen=True)
class SelectFile:
    kind: DocumentKind
    file: UploadedFile | None


@dataclass(frozen=True)
class RemoveFile:
    kind: DocumentKind


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class SubmitFailed:
    reason: str = ""


FormAction = EditField | SelectFile | RemoveFile | Submit | SubmitSucceeded | SubmitFailed


def selection_error(kind: DocumentKind, file: UploadedFile) -> str | None:
    """Check a file when it is selected.

    Advisory only: the server applies the same policy again.
    """
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        return f"Only PDF, DOC, and DOCX files are allowed for {kind.value}"

    if file.size > MAX_DOCUMENT_SIZE:
        return f"File size should be less than 5MB for {kind.value}"

    return None


def _settle(state: FormState) -> FormStatus:
    # Editing after an outcome starts a new attempt
    if state.status in (FormStatus.SUCCESS, FormStatus.ERROR):
        return FormStatus.IDLE
    return state.status


def reduce(state: FormState, action: FormAction) -> FormState:
    """Apply an action and return the resulting state."""
    if isinstance(action, EditField):
        if action.name not in FIELD_NAMES:
            raise ValueError(f"Unknown form field: {action.name}")
        fields = {**state.fields, action.name: action.value}
        return replace(state, fields=fields, status=_settle(state), error="", detail="")

    if isinstance(action, SelectFile):
        if action.file is not None:
            reason = selection_error(action.kind, action.file)
            if reason:
                status = state.status if state.is_submitting else FormStatus.ERROR
                return replace(state, status=status, error=reason, detail="")
        files = {**state.files, action.kind: action.file}
        return replace(state, files=files, status=_settle(state), error="", detail="")

    if isinstance(action, RemoveFile):
        files = {**state.files, action.kind: None}
        return replace(state, files=files, status=_settle(state), error="", detail="")

    if isinstance(action, Submit):
        if state.is_submitting:
            return state
        missing = state.missing_labels()
        if missing:
            return replace(
                state,
                status=FormStatus.ERROR,
                error=f"Please fill all required fields: {', '.join(missing)}",
                detail="",
            )
        return replace(state, status=FormStatus.SUBMITTING, error="", detail="")

    if isinstance(action, SubmitSucceeded):
        if not state.is_submitting:
            return state
        return FormState(status=FormStatus.SUCCESS)

    if isinstance(action, SubmitFailed):
        if not state.is_submitting:
            return state
        return replace(
            state,
            status=FormStatus.ERROR,
            error=SUBMIT_FAILED_MESSAGE,
            detail=action.reason,
        )

    raise TypeError(f"Unsupported form action: {action!r}")


def to_multipart(
    state: FormState,
) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
    """Encode the form as multipart data and files.

    Every scalar field is sent, empty ones as empty strings. Only selected
    files are included, keyed by document kind.
    """
    data = {name: state.fields.get(name, "") for name in FIELD_NAMES}
    files = {
        kind.value: (
            file.filename,
            file.content,
            file.content_type or "application/octet-stream",
        )
        for kind, file in state.selected_files()
    }
    return data, files
