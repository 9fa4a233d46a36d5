#!/usr/bin/env python3
"""
Error handlers for the web application.

Service exceptions are defined in core/errors.py and re-exported here so
routers and services import them from one place.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import (
    AssignmentException,
    NotFound,
    RetrievalError,
    SequencingConflict,
    ServiceException,
    ValidationError,
)

logger = logging.getLogger(__name__)

__all__ = [
    'AssignmentException',
    'NotFound',
    'RetrievalError',
    'SequencingConflict',
    'ServiceException',
    'ValidationError',
    'service_exception_handler',
    'request_validation_handler',
    'http_exception_handler',
    'general_exception_handler',
]


def _status_code_for(exc: ServiceException) -> int:
    if isinstance(exc, NotFound):
        return 404
    if isinstance(exc, (ValidationError, AssignmentException)):
        return 400
    if isinstance(exc, SequencingConflict):
        return 409
    return 500


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = _status_code_for(exc)

    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.warning(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }
    if isinstance(exc, RetrievalError):
        content["details"] = exc.details
        content["retryable"] = exc.retryable

    return JSONResponse(status_code=status_code, content=content)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed query parameters and bodies as 400 with the service error shape.
    """
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {details}")

    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request parameters",
            "type": "ValidationError",
            "details": details
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
