"""Error handlers for the FastAPI application.

Every request error is terminal: the handlers below log the failure and turn
it into a status code plus a small JSON error body of the form
``{"error": {"message": ..., "status_code": ..., "details": ...}}``.
Store failures and unexpected errors never expose their internals.
"""

from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger

logger = get_logger("core.error_handlers")

DATABASE_ERROR_MESSAGE = "A database error occurred"
INTERNAL_ERROR_MESSAGE = "An internal server error occurred"


def create_error_response(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    details: Optional[dict] = None,
) -> JSONResponse:
    """Build the JSON error body shared by every handler.

    Args:
        message: Error message shown to the client.
        status_code: HTTP status code.
        details: Optional error details; omitted from the body when empty.

    Returns:
        JSONResponse carrying the error body and status.
    """
    body = {"message": message, "status_code": status_code}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content={"error": body})


def _describe(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an application exception with its own status and details.

    Server-side failures (5xx, such as duplicate meal ids) are logged as
    errors; client mistakes (bad paths, unknown ids) as warnings.

    Args:
        request: Incoming request.
        exc: Application exception raised by a service or router.

    Returns:
        JSONResponse with the exception's status code.
    """
    level = "error" if exc.status_code >= 500 else "warning"
    getattr(logger, level)("%s -> %s: %s", _describe(request), exc.status_code, exc.message)
    return create_error_response(exc.message, exc.status_code, exc.details)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI request validation failures as a 422.

    Args:
        request: Incoming request.
        exc: Validation error raised by FastAPI.

    Returns:
        JSONResponse listing each offending field.
    """
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning("%s -> validation failed: %s", _describe(request), errors)
    return create_error_response(
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"validation_errors": errors},
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Render a datastore failure as a 500 without leaking the cause.

    Args:
        request: Incoming request.
        exc: SQLAlchemy error raised while querying the store.

    Returns:
        JSONResponse with a generic database error message.
    """
    logger.error("%s -> datastore failure: %s", _describe(request), exc, exc_info=exc)
    return create_error_response(DATABASE_ERROR_MESSAGE, details={"type": "database_error"})


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Render any other exception as a 500.

    Args:
        request: Incoming request.
        exc: Unhandled exception.

    Returns:
        JSONResponse with a generic internal error message.
    """
    logger.error("%s -> unhandled %s: %s", _describe(request), type(exc).__name__, exc, exc_info=exc)
    return create_error_response(INTERNAL_ERROR_MESSAGE, details={"type": "internal_error"})


HANDLERS = (
    (AppException, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (SQLAlchemyError, sqlalchemy_exception_handler),
    (Exception, generic_exception_handler),
)


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    for exc_class, handler in HANDLERS:
        app.add_exception_handler(exc_class, handler)
    logger.info("Registered %s exception handlers", len(HANDLERS))
