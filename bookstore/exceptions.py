"""
Bookstore Exception Hierarchy

Services raise these exceptions; a single set of handlers registered in
main.py turns them into the error envelope:

    {"status": "error", "message": "...", "errors": ...}

Exception Hierarchy:
    BookstoreError (base)        → 500
    ├── BadRequestError          → 400 (validation, content type, unknown ids)
    ├── UnauthorizedError        → 401 (token problems, bad credentials)
    ├── ConflictError            → 409 (duplicate username)
    ├── NotFoundError            → 404 (service-level lookups)
    └── InternalServerError      → 500 (persistence or gateway failure)
"""

from typing import Any

from fastapi import status


class BookstoreError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: User-facing error description (returned in the response)
        errors: Optional structured detail (field errors, upstream reason)
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, errors: Any = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class BadRequestError(BookstoreError):
    """Client sent something it can fix: invalid fields, wrong content type, unknown id."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(BookstoreError):
    """
    Missing or invalid credentials.

    Messages do not distinguish an unknown username from a wrong password,
    or a forged token from an expired one.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ConflictError(BookstoreError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class NotFoundError(BookstoreError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "The requested resource was not found"


class InternalServerError(BookstoreError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
