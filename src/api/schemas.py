"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel

PROCESSING_FAILED_MESSAGE = "Failed to process application"


class SubmissionResponse(BaseModel):
    """Schema for an accepted application."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Schema for a rejected or failed application."""

    error: str


class ServiceInfo(BaseModel):
    """Schema for the root endpoint."""

    name: str
    version: str
    status: str


class HealthResponse(BaseModel):
    """Schema for the health check."""

    status: str
    environment: str
    email_configured: bool
