"""Application submission API routes."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData
from starlette.datastructures import UploadFile as StarletteUploadFile

from src.api.dependencies import SubmissionServiceDep
from src.api.schemas import PROCESSING_FAILED_MESSAGE, ErrorResponse, SubmissionResponse
from src.applications.models import FIELD_NAMES, DocumentKind, UploadedFile
from src.applications.validator import SubmissionError

logger = logging.getLogger(__name__)

router = APIRouter()


def processing_failed() -> JSONResponse:
    """Opaque 500 response; the cause is only logged."""
    return JSONResponse(status_code=500, content={"error": PROCESSING_FAILED_MESSAGE})


async def read_application_form(
    form: FormData,
) -> tuple[dict[str, str | None], dict[str, UploadedFile]]:
    """Split multipart form data into scalar fields and attached documents.

    Parts with unknown names are ignored. A document part only counts when it
    carries a file.
    """
    fields: dict[str, str | None] = {}
    for name in FIELD_NAMES:
        value = form.get(name)
        fields[name] = value if isinstance(value, str) else None

    documents: dict[str, UploadedFile] = {}
    for kind in DocumentKind:
        part = form.get(kind.value)
        if not isinstance(part, StarletteUploadFile):
            continue
        documents[kind.value] = UploadedFile(
            filename=part.filename or kind.value,
            content=await part.read(),
            content_type=part.content_type,
        )

    return fields, documents


@router.post(
    "/send-email",
    response_model=SubmissionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def send_email(request: Request, service: SubmissionServiceDep):
    """
    Submit a job application.

    Accepts multipart form data with the fields fullName, email, phone,
    position and location, plus one file part per document kind. The
    application is emailed with its documents to the HR inbox of the chosen
    location.
    """
    try:
        async with request.form() as form:
            fields, documents = await read_application_form(form)
    except Exception as e:
        logger.error(f"Failed to parse application form: {type(e).__name__}: {e}")
        return processing_failed()

    try:
        await service.submit(fields, documents)
    except SubmissionError as e:
        logger.info(f"Rejected application: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception(f"Email sending error: {type(e).__name__}: {e}")
        return processing_failed()

    return SubmissionResponse(success=True)
