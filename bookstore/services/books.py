"""
Book Service

Catalog operations and the purchase flow.

Filtering:
==========
fetch_all_books loads the whole catalog and filters in memory:
- genre: case-insensitive exact match against any entry of book.genre
- author: case-insensitive substring match against any entry of book.authors
Both filters must match when both are given. total is counted after
filtering and before pagination.

Purchases:
==========
1. Look the book up (NotFoundError if missing, the gateway is not called)
2. total = round(price * 100 * quantity), half-up, in minor units
3. Initialize the payment with the gateway
4. Store a pending purchase with the gateway's reference

If step 4 fails the gateway transaction is left orphaned; nothing
compensates for it.
"""

import logging
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from bookstore.exceptions import InternalServerError, NotFoundError
from bookstore.models import Book
from bookstore.repositories import BookRepository, PurchaseRepository
from bookstore.schemas.purchase import PaymentInitialization, PurchaseRecord
from bookstore.services.payments import PaymentGateway

logger = logging.getLogger(__name__)

# Columns a client can write; anything else in an update payload is ignored
BOOK_FIELDS = (
    "title",
    "authors",
    "publisher",
    "published",
    "genre",
    "summary",
    "cover_image",
    "price",
)


@dataclass
class BookPage:
    items: list[Book]
    total: int
    limit: int
    offset: int


def matches_filters(book: Book, genre: str | None = None, author: str | None = None) -> bool:
    """Check a book against the optional genre and author filters."""
    if genre:
        wanted = genre.lower()
        if not any(g.lower() == wanted for g in book.genre or []):
            return False

    if author:
        wanted = author.lower()
        if not any(wanted in a.lower() for a in book.authors or []):
            return False

    return True


def calculate_total_price(price: Decimal | float | str, quantity: int) -> int:
    """
    Total for a purchase in minor currency units.

    Example:
        >>> calculate_total_price(Decimal("12.99"), 2)
        2598
    """
    amount = Decimal(str(price)) * 100 * quantity
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class BookService:
    def __init__(
        self,
        books: BookRepository,
        purchases: PurchaseRepository,
        gateway: PaymentGateway,
    ) -> None:
        self.books = books
        self.purchases = purchases
        self.gateway = gateway

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------
    def create_book(self, fields: dict[str, Any]) -> Book:
        book = self.books.create_book(
            {key: value for key, value in fields.items() if key in BOOK_FIELDS}
        )
        logger.info(f"Book created: {book.id} ({book.title})")
        return book

    def fetch_all_books(
        self,
        limit: int = 10,
        offset: int = 0,
        genre: str | None = None,
        author: str | None = None,
    ) -> BookPage:
        """
        One page of the catalog, optionally filtered.

        Args:
            limit: Page size (>= 1)
            offset: Number of filtered books to skip (>= 0)
            genre: Exact genre name, any case
            author: Part of an author name, any case

        Returns:
            BookPage whose total is the size of the filtered set
        """
        books = self.books.fetch_all_books()

        if genre or author:
            books = [book for book in books if matches_filters(book, genre, author)]

        return BookPage(
            items=books[offset:offset + limit],
            total=len(books),
            limit=limit,
            offset=offset,
        )

    def fetch_book(self, book_id: uuid.UUID) -> Book:
        book = self.books.fetch_book(book_id)
        if book is None:
            raise NotFoundError(f"Book not found with id: {book_id}")
        return book

    def update_book(self, book_id: uuid.UUID, fields: dict[str, Any]) -> Book:
        """
        Merge the given fields over the stored book and write the result.

        Fields not present in `fields` keep their stored values.

        Raises:
            NotFoundError: if the book does not exist
            InternalServerError: if the write reports no updated row
        """
        existing = self.fetch_book(book_id)

        merged = {column: getattr(existing, column) for column in BOOK_FIELDS}
        merged.update({key: value for key, value in fields.items() if key in BOOK_FIELDS})

        updated = self.books.update_book(book_id, merged)
        if updated is None:
            logger.error(f"Update reported no rows for book {book_id}")
            raise InternalServerError(f"Failed to update book with id: {book_id}")

        logger.info(f"Book updated: {book_id}")
        return updated

    def delete_book(self, book_id: uuid.UUID) -> bool:
        self.fetch_book(book_id)
        self.books.delete_book(book_id)
        logger.info(f"Book deleted: {book_id}")
        return True

    # -------------------------------------------------------------------------
    # Purchases
    # -------------------------------------------------------------------------
    def create_purchase(
        self,
        user_id: uuid.UUID,
        book_id: uuid.UUID,
        quantity: int,
    ) -> PaymentInitialization:
        """
        Initialize payment for `quantity` copies of a book and record it.

        Returns:
            The gateway's initialization payload (authorization_url,
            access_code, reference)

        Raises:
            NotFoundError: unknown book
            InternalServerError: gateway failure, or the purchase row could
                not be stored
        """
        book = self.fetch_book(book_id)
        total_price = calculate_total_price(book.price, quantity)

        payment = self.gateway.initialize(str(user_id), str(total_price))

        purchase = self.purchases.create_purchase(
            payment_reference=payment.reference,
            user_id=user_id,
            book_id=book_id,
            quantity=quantity,
            total_price=total_price,
        )
        if purchase is None:
            logger.error(
                f"Purchase not stored after payment initialization "
                f"(reference={payment.reference}, user={user_id}, book={book_id})"
            )
            raise InternalServerError("Failed to create purchase")

        logger.info(
            f"Purchase {purchase.id} pending: user={user_id} book={book_id} "
            f"quantity={quantity} total={total_price}"
        )
        return payment

    def fetch_user_purchases(self, user_id: uuid.UUID) -> list[PurchaseRecord]:
        return self.purchases.fetch_user_purchases(user_id)
