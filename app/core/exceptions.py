"""
Custom exceptions for Prepify.

Every error carries the HTTP status the API layer answers with, so routers can
let them propagate and rely on the handlers registered in ``app.main``.
"""
import logging
from typing import Optional
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Custom Exception Classes
# ============================================================================

class AppError(Exception):
    """Base exception for all application errors."""
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class GenerationError(AppError):
    """The hosted text-generation model failed or returned nothing usable."""
    status_code = 502


class ConfigurationError(GenerationError):
    """Configuration is invalid or missing (e.g. no API key)."""
    status_code = 503


class EvaluationError(AppError):
    """The interview evaluation batch failed; the session is still in progress."""
    status_code = 502


class ExportError(AppError):
    """Assembling or serializing the resume document failed."""
    status_code = 500


class InterviewStateError(AppError):
    """The operation is not allowed in the session's current state."""
    status_code = 409


class BlankAnswerError(InterviewStateError):
    """Advancing was requested while the current answer is blank."""
    status_code = 422


class SessionNotFoundError(AppError):
    """No live session with the requested id."""
    status_code = 404


# ============================================================================
# FastAPI Exception Handlers
# ============================================================================

async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__, **exc.details},
    )


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error", "error": str(exc)},
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(f"HTTP exception: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )
