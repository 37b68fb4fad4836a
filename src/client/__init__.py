"""Client side of the application form.

This module provides:
- FormState and reduce: the form state machine
- ApplicationClient: HTTP client for the submission endpoint
"""

from src.client.api_client import ApplicationClient, submit_form
from src.client.form import (
    EditField,
    FormState,
    FormStatus,
    RemoveFile,
    SelectFile,
    Submit,
    SubmitFailed,
    SubmitSucceeded,
    reduce,
    to_multipart,
)

__all__ = [
    # State machine
    "FormState",
    "FormStatus",
    "reduce",
    "to_multipart",
    # Actions
    "EditField",
    "SelectFile",
    "RemoveFile",
    "Submit",
    "SubmitSucceeded",
    "SubmitFailed",
    # HTTP
    "ApplicationClient",
    "submit_form",
]
