"""
Books Router

Catalog CRUD and purchases. Every endpoint requires a JWT.

Endpoints:
- POST   /books                          create (JSON or multipart)
- GET    /books                          list with limit/offset/genre/author
- GET    /books/{book_id}                fetch one
- PUT    /books/{book_id}                partial update (JSON or multipart)
- DELETE /books/{book_id}                delete
- POST   /books/buy/{book_id}            start a payment
- GET    /books/transactions/{user_id}   a user's purchases

Order of checks on each request: authentication, then request
validation and existence checks, then the handler.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from bookstore.dependencies import (
    BookQuery,
    BookServiceDep,
    CurrentUser,
    ExistingBookId,
    ExistingUserId,
    get_current_user,
)
from bookstore.schemas.book import BookCreate, BookListResponse, BookResponse, BookUpdate
from bookstore.schemas.common import Envelope, ErrorResponse, envelope
from bookstore.schemas.purchase import PaymentInitialization, PurchaseRecord, PurchaseRequest
from bookstore.utils.uploads import book_create_payload, book_update_payload


router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(get_current_user)],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error or unknown id"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    },
)

BookCreatePayload = Annotated[BookCreate, Depends(book_create_payload)]
BookUpdatePayload = Annotated[BookUpdate, Depends(book_update_payload)]


@router.post(
    "",
    response_model=Envelope[BookResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Send JSON, or multipart/form-data to include a cover image.",
)
def create_book(payload: BookCreatePayload, books: BookServiceDep) -> dict:
    book = books.create_book(payload.model_dump())
    return envelope(
        "Book Created Successfully",
        status.HTTP_201_CREATED,
        BookResponse.model_validate(book),
    )


@router.get(
    "",
    response_model=Envelope[BookListResponse],
    summary="List books",
)
def list_books(query: BookQuery, books: BookServiceDep) -> dict:
    """
    List books, newest first.

    Examples:
        GET /api/v1/books?genre=fantasy
        GET /api/v1/books?author=tolkien&limit=5&offset=5
    """
    page = books.fetch_all_books(
        limit=query.limit,
        offset=query.offset,
        genre=query.genre,
        author=query.author,
    )
    return envelope(
        "Books Fetched Successfully",
        status.HTTP_200_OK,
        BookListResponse.model_validate(page),
    )


@router.get(
    "/transactions/{user_id}",
    response_model=Envelope[list[PurchaseRecord]],
    summary="List a user's purchases",
)
def list_purchases(
    user_id: ExistingUserId,
    books: BookServiceDep,
) -> dict:
    purchases = books.fetch_user_purchases(user_id)
    return envelope("Purchases Fetched Successfully", status.HTTP_200_OK, purchases)


@router.post(
    "/buy/{book_id}",
    response_model=Envelope[PaymentInitialization],
    summary="Buy a book",
    description="Initializes a payment and records a pending purchase.",
)
def buy_book(
    book_id: ExistingBookId,
    order: PurchaseRequest,
    user: CurrentUser,
    books: BookServiceDep,
) -> dict:
    payment = books.create_purchase(user.id, book_id, order.quantity)
    return envelope("Payment Initiated Successfully", status.HTTP_200_OK, payment)


@router.get(
    "/{book_id}",
    response_model=Envelope[BookResponse],
    summary="Get a book by ID",
)
def get_book(book_id: ExistingBookId, books: BookServiceDep) -> dict:
    book = books.fetch_book(book_id)
    return envelope(
        "Book Fetched Successfully",
        status.HTTP_200_OK,
        BookResponse.model_validate(book),
    )


@router.put(
    "/{book_id}",
    response_model=Envelope[BookResponse],
    summary="Update a book",
    description="Only the fields sent are changed.",
)
def update_book(
    book_id: ExistingBookId,
    payload: BookUpdatePayload,
    books: BookServiceDep,
) -> dict:
    book = books.update_book(book_id, payload.model_dump(exclude_unset=True))
    return envelope(
        "Book Updated Successfully",
        status.HTTP_200_OK,
        BookResponse.model_validate(book),
    )


@router.delete(
    "/{book_id}",
    response_model=Envelope[None],
    summary="Delete a book",
)
def delete_book(book_id: ExistingBookId, books: BookServiceDep) -> dict:
    books.delete_book(book_id)
    return envelope("Books Deleted Successfully", status.HTTP_200_OK)
