"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    InkpressException (base)
       │
       ├── NotFoundError (404)          ← Resource not found
       │      ├── PostNotFoundError
       │      └── TermNotFoundError
       ├── ValidationError (400)        ← Invalid input data
       │      └── InvalidCategoryError  ← Unknown/self-referencing taxonomy reference
       └── ConflictError (409)          ← Term slug already taken

Slug collisions on posts are NOT errors: the slug allocator resolves them by
suffixing (-2, -3, ...).

Usage:
======
    from inkpress.shared.core.exceptions import NotFoundError, ValidationError

    # Raise with automatic status code
    raise PostNotFoundError(post_id)
    # Results in: {"error": {"code": "NOT_FOUND", "message": "Post with id '42' not found"}}

    # Raise with additional details
    raise InvalidCategoryError("Invalid parent category", details={"parent": 99})

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Post with id '42' not found",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class InkpressException(Exception):
    """
    Base exception for all Inkpress application errors.

    All custom exceptions inherit from this class, providing:
    - HTTP status code mapping
    - Error code for programmatic handling
    - Optional details dictionary
    - Consistent JSON serialization

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(InkpressException):
    """
    Resource not found error (404 Not Found).

    Base class for all "not found" errors with automatic message formatting.

    Example:
        raise NotFoundError("Post", 42)
        # Message: "Post with id '42' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class PostNotFoundError(NotFoundError):
    """Post not found error."""

    def __init__(self, post_id: int) -> None:
        super().__init__(resource="Post", resource_id=post_id)


class TermNotFoundError(NotFoundError):
    """Category or tag binding not found error."""

    def __init__(self, kind: str, term_taxonomy_id: int) -> None:
        super().__init__(resource=kind.capitalize(), resource_id=term_taxonomy_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(InkpressException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class InvalidCategoryError(ValidationError):
    """
    Invalid taxonomy reference.

    Raised before any row is written when a post references a category or
    tag binding that does not exist, or when a category would become its
    own parent.
    """

    def __init__(
        self,
        message: str = "Invalid parent category",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


class ConflictError(InkpressException):
    """
    Resource conflict error (409 Conflict).

    Raised when operation conflicts with existing resource.

    Example:
        raise ConflictError("Category slug already exists")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )
