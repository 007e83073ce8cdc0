"""
Legacy Audit - Main Application Entry Point
"""
import logging
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

from legacy_audit.api.router import api_router
from legacy_audit.core.config import settings
from legacy_audit.core.errors import (
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from legacy_audit.core.logging import setup_logging
from legacy_audit.services.audit_hooks import setup_audit_listeners

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    parsed = urlparse(url)
    if parsed.scheme.startswith("sqlite"):
        return url
    if parsed.password:
        netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
        if parsed.port:
            netloc += f":{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc))
    return url


app = FastAPI(
    title="Legacy Audit",
    description="Audit trail over the legacy Audit table",
    version=settings.VERSION or "1.0.0"
)

# Register exception handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup_log_config() -> None:
    """Log DATABASE_URL at startup so it can be verified against Alembic."""
    masked = _mask_database_url(settings.DATABASE_URL)
    logger.info("DATABASE_URL (app): %s", masked)


@app.on_event("startup")
def register_audit_hooks() -> None:
    setup_audit_listeners()
    logger.info("Audit pre-save hooks registered")
