"""
QRVault Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the three failure classes the API knows.
How:   Each exception carries a client-safe message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status code.
Who:   Raised by the generator, store, and service; caught by global handlers.

Exception Hierarchy:
    QRVaultError (base)
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── NotFoundError        → 404 Not Found
    └── InternalError        → 500 Internal Server Error (details logged only)
        ├── DatabaseError    → storage engine failure
        └── CodecError       → QR encoding failure

Not-found is always signalled by raising NotFoundError (or by a store read
returning None); callers never inspect message text to classify an error.
"""

from typing import Any, Dict, Optional


class QRVaultError(Exception):
    """
    Base exception for all QRVault application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(QRVaultError):
    """
    Raised when client input fails validation.

    When:    Empty content, unparsable id, malformed JSON body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Content is required",
            "details": {"field": "content"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(QRVaultError):
    """
    Raised when an operation targets a QR code that does not exist.

    When:    GET/PUT/DELETE /qr/{id} with an id the store has never issued
             (or one that has since been deleted).
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class InternalError(QRVaultError):
    """
    Raised when a server-side dependency fails.

    HTTP:    500 Internal Server Error

    The handler always answers with a generic message; `message` and `context`
    are written to the server log only.
    """

    def __init__(
        self,
        message: str = "An internal error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(InternalError):
    """
    Raised when a SQLite operation fails unexpectedly.

    When:    Database file unreadable, disk full, locked past the busy timeout.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CodecError(InternalError):
    """
    Raised when the QR library cannot encode the given content.

    When:    Content exceeds the capacity of the largest QR version at the
             configured error-correction level, or image rendering fails.
    """

    def __init__(
        self,
        message: str = "Failed to generate QR code",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
