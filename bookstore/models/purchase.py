"""
Purchase Model

One row per initiated payment. Created with status "pending" right after
the gateway hands back a reference; nothing in this service moves it out
of that state.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.database import Base

if TYPE_CHECKING:
    from bookstore.models.book import Book
    from bookstore.models.user import User


PENDING = "pending"


class Purchase(Base):
    """
    Purchase model.

    Table: purchases

    total_price is stored in minor currency units (price * 100 * quantity)
    and is always computed server side.
    """

    __tablename__ = "purchases"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    payment_reference: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Reference assigned by the payment gateway"
    )

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=PENDING,
        server_default=PENDING,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )

    book_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("books.id"),
        index=True,
        nullable=False,
    )

    purchase_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    total_price: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Total in minor currency units"
    )

    user: Mapped["User"] = relationship("User", back_populates="purchases")
    book: Mapped["Book"] = relationship("Book", back_populates="purchases")

    def __repr__(self) -> str:
        return (
            f"Purchase(id={self.id}, reference='{self.payment_reference}', "
            f"status='{self.status}')"
        )
