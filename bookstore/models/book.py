"""
Book Model

The catalog entry sold by the store.

Authors and genres are ordered lists of plain strings stored in JSON
columns, which works on PostgreSQL and on the SQLite test database alike.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    LargeBinary,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.database import Base

if TYPE_CHECKING:
    from bookstore.models.purchase import Purchase


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title
    - authors: Ordered list of author names
    - publisher: Publisher name
    - published: Publication date
    - genre: List of genre names
    - summary: Optional blurb
    - cover_image: Optional raw image bytes
    - price: Price in major currency units, 2 decimal places

    Example:
        book = Book(
            title="1984",
            authors=["George Orwell"],
            publisher="Secker & Warburg",
            published=date(1949, 6, 8),
            genre=["Dystopian", "Classic"],
            price=Decimal("12.99"),
        )
    """

    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    authors: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of author names"
    )

    publisher: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    published: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date of publication"
    )

    genre: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="List of genre names"
    )

    summary: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    cover_image: Mapped[bytes | None] = mapped_column(
        LargeBinary,
        nullable=True,
        comment="Raw cover image bytes from a multipart upload"
    )

    # Numeric(10, 2): major currency units, scaled to minor units at purchase
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Book price in major currency units"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    purchases: Mapped[list["Purchase"]] = relationship(
        "Purchase",
        back_populates="book",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
