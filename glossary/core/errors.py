"""
Error taxonomy and exception handlers

Only dataset load failures are user visible. Persistence and navigation
problems are recovered where they happen and only logged.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from glossary.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for application errors rendered as JSON"""

    code = "app_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}


class DataLoadError(AppError):
    """Transport, network or status failure while fetching the dataset"""

    code = "data_load_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class DataFormatError(AppError):
    """Dataset payload was fetched but does not have the required shape"""

    code = "data_format_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class PersistenceWarning(AppError):
    """Navigation history could not be read from or written to storage"""

    code = "persistence_warning"


class NavigationMiss(AppError):
    """Requested term ID is not in the store"""

    code = "term_not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ServiceUnavailableError(AppError):
    """Glossary is still loading or failed to load"""

    code = "service_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


def _error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> dict:
    return {"error": {"code": code, "message": message, "details": details or {}}}


async def app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render AppError subclasses"""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message, exc.details),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("http_error", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_error_body(
            ValidationError.code,
            "Request validation failed",
            {"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "Internal server error"),
    )
