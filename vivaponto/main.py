"""
VivaPonto Backend - Main Application Entry Point
"""
import logging
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from vivaponto.api.router import api_router
from vivaponto.core.config import settings
from vivaponto.core.errors import (
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from vivaponto.core.logging import setup_logging
from vivaponto.db.init_db import init_db
from vivaponto.db.session import SessionLocal

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "***"
    if parsed.scheme == "sqlite":
        return url
    if parsed.password:
        netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
        if parsed.port:
            netloc += f":{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc))
    return url


# Create FastAPI app
app = FastAPI(
    title="VivaPonto Backend",
    description="Time and attendance: punches, adjustment requests and hour bank reports",
    version=settings.VERSION or "1.0.0"
)

# Configure CORS - must be before other middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
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
    logger.info("Timezone: %s, zero-punch days: %s", settings.APP_TIMEZONE, settings.REPORT_ZERO_PUNCH_DAYS)


@app.on_event("startup")
def bootstrap_initial_admin() -> None:
    """
    Create the initial admin user and default shift if they don't exist.
    This ensures the system always has at least one admin user.
    """
    db = SessionLocal()
    try:
        init_db(db)
    except OperationalError as e:
        db.rollback()
        # Tables might not exist yet when running against an unmigrated database
        if "no such table" in str(e).lower() or "does not exist" in str(e).lower():
            logger.warning("Database tables not ready yet, skipping initial bootstrap")
        else:
            logger.error("Database error during admin bootstrap: %s", e)
    finally:
        db.close()


async def _handle_operational_error(request, exc: Exception):
    if "no such table" in str(exc).lower():
        return JSONResponse(
            status_code=500,
            content={"detail": "Run alembic upgrade head"},
        )
    return await generic_exception_handler(request, exc)


app.add_exception_handler(OperationalError, _handle_operational_error)
