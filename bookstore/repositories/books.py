"""
Book persistence.

fetch_all_books returns the whole table; filtering and pagination happen
in BookService, in memory.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from bookstore.models import Book


class BookRepository(ABC):
    """Storage contract for catalog entries."""

    @abstractmethod
    def create_book(self, fields: dict[str, Any]) -> Book:
        ...

    @abstractmethod
    def fetch_all_books(self) -> list[Book]:
        """Every book, newest first."""
        ...

    @abstractmethod
    def fetch_book(self, book_id: uuid.UUID) -> Book | None:
        ...

    @abstractmethod
    def update_book(self, book_id: uuid.UUID, fields: dict[str, Any]) -> Book | None:
        """Write the given column values; None when no row was updated."""
        ...

    @abstractmethod
    def delete_book(self, book_id: uuid.UUID) -> None:
        ...


class SqlBookRepository(BookRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def create_book(self, fields: dict[str, Any]) -> Book:
        book = Book(**fields)
        self.db.add(book)
        self.db.commit()
        self.db.refresh(book)
        return book

    def fetch_all_books(self) -> list[Book]:
        stmt = select(Book).order_by(Book.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def fetch_book(self, book_id: uuid.UUID) -> Book | None:
        return self.db.get(Book, book_id)

    def update_book(self, book_id: uuid.UUID, fields: dict[str, Any]) -> Book | None:
        stmt = update(Book).where(Book.id == book_id).values(**fields)
        result = self.db.execute(stmt)
        self.db.commit()

        if result.rowcount == 0:
            return None

        return self.db.get(Book, book_id)

    def delete_book(self, book_id: uuid.UUID) -> None:
        self.db.execute(delete(Book).where(Book.id == book_id))
        self.db.commit()
