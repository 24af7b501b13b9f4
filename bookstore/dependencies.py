"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- Database sessions (per-request)
- Services built on the request's session
- Authentication (Authorization: JWT <token>)
- Catalog query parameters
- Existence checks that run before a handler
"""

import logging
import uuid
from typing import Annotated

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from bookstore.database import get_db
from bookstore.exceptions import BadRequestError, UnauthorizedError
from bookstore.repositories import (
    SqlBookRepository,
    SqlPurchaseRepository,
    SqlUserRepository,
)
from bookstore.schemas.user import PublicUser
from bookstore.services.auth import AuthService
from bookstore.services.books import BookService
from bookstore.services.payments import PaymentGateway
from bookstore.services.security import decode_token

logger = logging.getLogger(__name__)

AUTH_SCHEME = "JWT"

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Services
# =============================================================================
def get_payment_gateway(request: Request) -> PaymentGateway:
    """
    The application-wide payment gateway.

    Built once in the lifespan handler (see main.py) and kept on app.state.
    Tests override this dependency to inject a fake gateway.
    """
    return request.app.state.payment_gateway


def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(SqlUserRepository(db))


def get_book_service(
    db: DbSession,
    gateway: Annotated[PaymentGateway, Depends(get_payment_gateway)],
) -> BookService:
    return BookService(
        books=SqlBookRepository(db),
        purchases=SqlPurchaseRepository(db),
        gateway=gateway,
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]


# =============================================================================
# JWT Authentication
# =============================================================================
def get_current_user(
    db: DbSession,
    authorization: str | None = Header(
        default=None,
        description="JWT <token>",
    ),
) -> PublicUser:
    """
    Resolve the user behind the Authorization header.

    Expected format:
        Authorization: JWT eyJhbGciOiJIUzI1NiIs...

    Raises:
        UnauthorizedError: header missing, malformed, token invalid or
            expired, or the user no longer exists
    """
    if not authorization:
        raise UnauthorizedError("No authorization header provided")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != AUTH_SCHEME or not parts[1]:
        raise UnauthorizedError("Invalid authorization header format")

    payload = decode_token(parts[1])
    if payload is None or not payload.get("sub"):
        raise UnauthorizedError("Invalid or expired token")

    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except ValueError:
        logger.warning("Token subject is not a user id")
        raise UnauthorizedError("Invalid or expired token")

    user = SqlUserRepository(db).get_user(user_id)
    if user is None:
        logger.warning(f"Token for unknown user: {user_id}")
        raise UnauthorizedError("Invalid or expired token")

    return PublicUser(id=user.id, username=user.username)


CurrentUser = Annotated[PublicUser, Depends(get_current_user)]


# =============================================================================
# Catalog Query Parameters
# =============================================================================
class BookQueryParams:
    """
    Pagination and filters for GET /books.

    Usage:
        GET /api/v1/books?limit=5&offset=10&genre=fantasy&author=tolkien

    - limit/offset slice the filtered catalog: [offset, offset + limit)
    - genre matches a whole genre name, any case
    - author matches part of any author name, any case
    """

    def __init__(
        self,
        limit: int = Query(
            default=10,
            ge=1,
            description="Number of books to return",
            examples=[10, 25],
        ),
        offset: int = Query(
            default=0,
            ge=0,
            description="Number of matching books to skip",
            examples=[0, 10],
        ),
        genre: str | None = Query(
            default=None,
            description="Filter by genre (exact match, case-insensitive)",
            examples=["Fantasy"],
        ),
        author: str | None = Query(
            default=None,
            description="Filter by author name (partial match, case-insensitive)",
            examples=["tolkien"],
        ),
    ) -> None:
        self.limit = limit
        self.offset = offset
        self.genre = genre
        self.author = author


BookQuery = Annotated[BookQueryParams, Depends()]


# =============================================================================
# Existence Checks
# =============================================================================
# Unknown ids are a client error (400) at the API edge. A malformed UUID
# never reaches these functions; path validation rejects it first.
def book_exists(book_id: uuid.UUID, db: DbSession) -> uuid.UUID:
    if SqlBookRepository(db).fetch_book(book_id) is None:
        raise BadRequestError("Book not found")
    return book_id


def user_exists(user_id: uuid.UUID, db: DbSession) -> uuid.UUID:
    if SqlUserRepository(db).get_user(user_id) is None:
        raise BadRequestError("User not found")
    return user_id


ExistingBookId = Annotated[uuid.UUID, Depends(book_exists)]
ExistingUserId = Annotated[uuid.UUID, Depends(user_exists)]
