"""
Error Handling Utilities
Provides sanitized error messages and consistent error responses.

Every error response uses the same envelope and never includes partial
statistics: {"error": <message>, "error_code": <code>}.
"""

import logging
from enum import Enum

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoice_stats.integrations.sheets.exceptions import (
    RecordSourceError,
    RecordSourceTimeoutError,
    SourceNotFoundError,
)
from invoice_stats.reports.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error codes for frontend handling."""
    
    # Record store errors
    SOURCE_NOT_FOUND = "source_not_found"
    SOURCE_TIMEOUT = "source_timeout"
    SOURCE_FETCH_FAILED = "source_fetch_failed"
    
    # Report errors
    REPORT_FAILED = "report_failed"
    
    # General errors
    VALIDATION_ERROR = "validation_error"
    INTERNAL_ERROR = "internal_error"


# User-friendly error messages
ERROR_MESSAGES = {
    ErrorCode.SOURCE_NOT_FOUND: "Sheet ID not found",
    ErrorCode.SOURCE_TIMEOUT: "The record store took too long to respond. Please try again.",
    ErrorCode.SOURCE_FETCH_FAILED: "Unable to read records. Please try again in a moment.",
    ErrorCode.REPORT_FAILED: "Unable to calculate dashboard statistics. Please try again later.",
    ErrorCode.VALIDATION_ERROR: "Invalid request. Please check your input and try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again later.",
}


def get_error_code_for_exception(exception: Exception) -> tuple[ErrorCode, int]:
    """
    Map exception types to error codes and HTTP status codes.
    
    Args:
        exception: The exception that occurred
        
    Returns:
        Tuple of (error_code, http_status_code)
    """
    if isinstance(exception, SourceNotFoundError):
        return ErrorCode.SOURCE_NOT_FOUND, status.HTTP_404_NOT_FOUND
    
    if isinstance(exception, RecordSourceTimeoutError):
        return ErrorCode.SOURCE_TIMEOUT, status.HTTP_504_GATEWAY_TIMEOUT
    
    if isinstance(exception, RecordSourceError):
        return ErrorCode.SOURCE_FETCH_FAILED, status.HTTP_502_BAD_GATEWAY
    
    if isinstance(exception, ReportGenerationError):
        return ErrorCode.REPORT_FAILED, status.HTTP_500_INTERNAL_SERVER_ERROR
    
    # Only rejected request parameters count as caller errors
    if isinstance(exception, RequestValidationError):
        return ErrorCode.VALIDATION_ERROR, 422
    
    # Default to internal error
    return ErrorCode.INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR


def error_message_for(exception: Exception, error_code: ErrorCode) -> str:
    """
    Pick the message returned to the caller.
    
    Domain exceptions carry a message meant for callers; anything else
    gets the generic message for its code so internals are not leaked.
    """
    message = getattr(exception, "message", None)
    if isinstance(exception, (RecordSourceError, ReportGenerationError)) and message:
        return message
    if isinstance(exception, RequestValidationError):
        details = describe_validation_errors(exception)
        if details:
            return f"Invalid request: {details}"
    return ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.INTERNAL_ERROR])


def describe_validation_errors(exception: RequestValidationError) -> str:
    """Flatten FastAPI validation errors into "query.month: message" parts."""
    parts = []
    for error in exception.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def error_response(exception: Exception) -> JSONResponse:
    """
    Build the error envelope for an exception, logging full details.
    
    Args:
        exception: The exception that occurred
        
    Returns:
        JSONResponse with {"error", "error_code"}
    """
    error_code, http_status = get_error_code_for_exception(exception)
    logger.error(
        "Error [%s]: %s",
        error_code.value,
        str(exception),
        exc_info=exception,
    )
    
    return JSONResponse(
        status_code=http_status,
        content={
            "error": error_message_for(exception, error_code),
            "error_code": error_code.value,
        },
    )


async def global_exception_handler(_request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.
    
    Catches all unhandled exceptions and returns sanitized error responses.
    Excludes HTTPException (intentional responses) and ValidationError (FastAPI validation).
    """
    # Don't handle HTTPException - those are intentional responses
    if isinstance(exc, HTTPException):
        raise exc
    
    # RequestValidationError has its own handler
    if isinstance(exc, RequestValidationError):
        raise exc
    
    return error_response(exc)


async def validation_exception_handler(
    _request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Return rejected query parameters in the standard error envelope.
    """
    error_code, http_status = get_error_code_for_exception(exc)
    logger.warning("Rejected request: %s", describe_validation_errors(exc))
    
    return JSONResponse(
        status_code=http_status,
        content={
            "error": error_message_for(exc, error_code),
            "error_code": error_code.value,
        },
    )
