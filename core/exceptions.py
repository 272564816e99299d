"""Custom exception classes for the application.

Defines the error taxonomy raised by the lookup service and the data layer.
Each exception carries the HTTP status it maps to so the exception handlers
in `core.error_handlers` can render it consistently.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestError(AppException):
    """Exception raised when a request path or parameter is malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize bad request error.

        Args:
            message: Error message.
            field: Optional name of the offending input.
        """
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Meal').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class InternalError(AppException):
    """Exception raised when a stored-data invariant or the store itself fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, details=details)


class DuplicateMealError(InternalError):
    """Exception raised when more than one stored meal shares an identifier."""

    def __init__(self, identifier: int, count: int):
        """Initialize duplicate identifier error.

        Args:
            identifier: The meal id that matched several entities.
            count: Number of entities found for that id.
        """
        super().__init__(
            f"Found {count} meals with id '{identifier}'",
            details={"type": "duplicate_id"},
        )
        self.identifier = identifier
        self.count = count


class DatabaseError(InternalError):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize database error.

        Args:
            message: Database error message.
            operation: Optional operation that failed (e.g., 'query', 'health').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, details=details)
