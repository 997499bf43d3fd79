"""
Exception Handlers for FastAPI Application.

Maps application errors to ``{"error": message}`` responses and request
validation errors to detailed 422 responses.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from termscloud.utils.exceptions import TermsCloudError
from termscloud.utils.logger import get_logger

logger = get_logger(__name__)


async def terms_cloud_exception_handler(
    request: Request, exc: TermsCloudError
) -> JSONResponse:
    """Turn an application error into an error response.

    The response carries only the exception's public message; upstream details
    and raw LLM replies stay in the logs.

    Args:
        request: FastAPI Request object.
        exc: The raised TermsCloudError.

    Returns:
        JSONResponse with the exception's status code and {"error": message}.
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        exc.public_message,
        extra={
            "extra_fields": {
                "error_type": type(exc).__name__,
                "error": exc.message,
                "detail": getattr(exc, "detail", None),
                "http_path": request.url.path,
                "http_status_code": exc.status_code,
            }
        },
    )
    return JSONResponse(
        status_code=exc.status_code, content={"error": exc.public_message}
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the traceback, answer with a generic 500."""
    logger.error(
        "Server error",
        extra={
            "extra_fields": {
                "error_type": type(exc).__name__,
                "http_path": request.url.path,
            }
        },
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors and return detailed error messages.

    Args:
        request: FastAPI Request object.
        exc: RequestValidationError containing validation error details.

    Returns:
        JSONResponse with status 422 containing:
            - detail: List of validation errors with field paths and messages
            - message: User-friendly error message
            - error: Same message, for clients that only read "error"
    """
    error_details = []
    for error in exc.errors():
        error_details.append(
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.error(
        "Validation error",
        extra={
            "extra_fields": {
                "validation_errors": error_details,
                "http_path": request.url.path,
            }
        },
    )

    message = "Validation error: Please check your input data"
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={"detail": error_details, "message": message, "error": message},
    )
