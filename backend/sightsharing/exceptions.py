"""
SightSharing Backend: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and repositories; caught by global handlers.

Exception Hierarchy:
    SightSharingError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── FileStorageError         → 500 Internal Server Error
    │   └── ImageProcessingError → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error

The `context` dict is logged server-side and never returned to the client.
"""

from typing import Any, Dict, Optional


class SightSharingError(Exception):
    """
    Base exception for all SightSharing application errors.

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


class ValidationError(SightSharingError):
    """
    Raised when client input fails the presence checks.

    When:    A required text field is missing or blank on creation.
    HTTP:    400 Bad Request
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


class NotFoundError(SightSharingError):
    """
    Raised when a requested destination does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts
    that into this exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(SightSharingError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ImageProcessingError(FileStorageError):
    """
    Raised when an upload cannot be decoded or re-encoded as JPEG.

    The surrounding request is aborted; images ingested earlier in the
    same request stay on disk.
    """

    def __init__(
        self,
        message: str = "Error processing images",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(SightSharingError):
    """
    Raised when a statement against the destinations store fails.

    HTTP:    500 Internal Server Error
    The engine's error text goes to the log via `context`, not to the client.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
