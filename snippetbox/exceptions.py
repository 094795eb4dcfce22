"""
Snippetbox: Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the few error scenarios we have.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return a JSON error body or an HTML error page with the right status.

Exception Hierarchy:
    SnippetboxError (base)
    ├── NotFoundError     → 404 Not Found (no non-expired row matched)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class SnippetboxError(Exception):
    """
    Base exception for all Snippetbox application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(SnippetboxError):
    """
    Raised when a requested snippet does not exist or has expired.

    SQLAlchemy returns None for a query with no rows; the service layer turns
    that None into this exception so routes never check for it themselves.

    HTTP: 404 Not Found
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


class DatabaseError(SnippetboxError):
    """
    Raised when a database operation fails.

    When:    Connection lost, constraint violation, malformed schema, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The driver error is
    chained (`raise ... from e`) and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
