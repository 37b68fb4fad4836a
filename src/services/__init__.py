"""Services layer for business logic."""

from src.services.submission import SubmissionService

__all__ = ["SubmissionService"]
