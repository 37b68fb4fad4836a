"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import applications
from src.api.schemas import PROCESSING_FAILED_MESSAGE, HealthResponse, ServiceInfo
from src.config import settings

APP_NAME = "Job Application Mailer"
APP_VERSION = "0.1.0"

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    if not settings.email_configured:
        logger.warning("EMAIL_USER/EMAIL_PASSWORD not set - submissions will fail")
    if not settings.fallback_email:
        logger.warning("FALLBACK_EMAIL not set - unknown locations cannot be routed")
    yield


app = FastAPI(
    title=APP_NAME,
    description="Job application form backend that emails submissions to HR",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled errors without disclosing them to the caller."""
    logger.exception(f"Unhandled error: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": PROCESSING_FAILED_MESSAGE},
    )


# CORS middleware
_dev_origins = [
    "http://localhost:3000",
    "http://localhost:8000",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8000",
]
_prod_origins = [settings.frontend_url] if settings.frontend_url else []
app.add_middleware(
    CORSMiddleware,
    allow_origins=_dev_origins if settings.is_development else _prod_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.get("/", response_model=ServiceInfo)
async def root():
    """Root endpoint."""
    return ServiceInfo(name=APP_NAME, version=APP_VERSION, status="running")


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        environment=settings.app_env.value,
        email_configured=settings.email_configured,
    )


app.include_router(applications.router, prefix="/api", tags=["applications"])
