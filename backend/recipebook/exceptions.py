"""
RecipeBook Backend: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions raised by services and repositories.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and repositories; caught by the HTTP layer only.
When:  Synchronously, inside the service call that detected the problem.

Exception Hierarchy:
    RecipeBookError (base)
    ├── ValidationError   -> 400 Bad Request (client can fix the input)
    ├── NotFoundError     -> 404 Not Found
    ├── ConflictError     -> 409 Conflict (uniqueness, integrity, lifecycle)
    └── DatabaseError     -> 500 Internal Server Error

Services never translate these into HTTP concepts themselves; the mapping
lives entirely in `recipebook.main.register_exception_handlers`.
"""

from typing import Any, Dict, Optional


class RecipeBookError(Exception):
    """
    Base exception for all RecipeBook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned as `details` for
                  client errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RecipeBookError):
    """
    Raised when client input fails a business rule.

    When:    Empty name after trimming, non-positive portions or quantities,
             duplicate ingredient lines in one recipe.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types, missing body fields) never reach
    the services; FastAPI rejects those with 422 before the route runs.
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


class NotFoundError(RecipeBookError):
    """
    Raised when a lookup by id yields no record.

    HTTP:    404 Not Found

    Repositories return None for missing records on reads; services convert
    that into NotFoundError. Repository `update` raises it directly.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(RecipeBookError):
    """
    Raised when an operation would break a uniqueness, integrity or
    lifecycle rule.

    When:
        - Creating/renaming to a name another record already uses
        - Deleting a category that recipes still reference
        - Publishing a non-draft recipe, archiving an archived one
    HTTP:    409 Conflict

    The stored data is left untouched when this is raised.
    """

    def __init__(
        self,
        message: str = "The request conflicts with the current state",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(RecipeBookError):
    """
    Raised when the SQL storage backend fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    error type is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
