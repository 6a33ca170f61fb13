"""
NoteKeeper Backend: Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions let the service layer stay free of HTTP concerns
       while the global handlers still pick the right status code.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return plain-text error responses with the correct HTTP status code.
Who:   Raised by services and the auth gate; caught by global handlers.

Exception Hierarchy:
    NoteKeeperError (base)
    ├── AuthenticationError  → 401 Unauthorized ("Access Denied")
    ├── NotFoundError        → 404 Not Found ("Note not found.")
    └── DatabaseError        → 500 Internal Server Error

The context dict is for server-side logs only. Response bodies never include it.
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:  Error description (safe to log, may be returned to client)
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


class AuthenticationError(NoteKeeperError):
    """
    Raised by the auth gate when a request carries no verified identity.

    HTTP:    401 Unauthorized
    Body:    "Access Denied"
    """

    def __init__(
        self,
        message: str = "Access Denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NoteKeeperError):
    """
    Raised when a requested resource does not exist for the requesting user.

    A note owned by someone else is reported exactly like a missing one, so
    the response never reveals that the id exists.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NoteKeeperError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query, insert, update or delete failed.
    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    Security Note:
        The client only ever sees "Internal Server Error". Details (SQL,
        constraint names, driver messages) go to the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
