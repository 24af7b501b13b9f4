"""Purchase persistence and the per-user purchase history projection."""

import uuid
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore.models import Book, Purchase, User
from bookstore.schemas.purchase import PurchaseRecord


class PurchaseRepository(ABC):
    """Storage contract for purchases."""

    @abstractmethod
    def create_purchase(
        self,
        payment_reference: str,
        user_id: uuid.UUID,
        book_id: uuid.UUID,
        quantity: int,
        total_price: int,
    ) -> Purchase | None:
        ...

    @abstractmethod
    def fetch_user_purchases(self, user_id: uuid.UUID) -> list[PurchaseRecord]:
        """Purchases of one user joined with book title and username."""
        ...


class SqlPurchaseRepository(PurchaseRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def create_purchase(
        self,
        payment_reference: str,
        user_id: uuid.UUID,
        book_id: uuid.UUID,
        quantity: int,
        total_price: int,
    ) -> Purchase | None:
        purchase = Purchase(
            payment_reference=payment_reference,
            user_id=user_id,
            book_id=book_id,
            quantity=quantity,
            total_price=total_price,
        )
        self.db.add(purchase)
        self.db.commit()
        self.db.refresh(purchase)
        return purchase

    def fetch_user_purchases(self, user_id: uuid.UUID) -> list[PurchaseRecord]:
        stmt = (
            select(
                Purchase.id,
                Purchase.payment_reference,
                Purchase.status,
                Purchase.purchase_date,
                Purchase.quantity,
                Purchase.total_price,
                Book.title.label("book_title"),
                User.username.label("user_name"),
            )
            .join(Book, Purchase.book_id == Book.id)
            .join(User, Purchase.user_id == User.id)
            .where(Purchase.user_id == user_id)
            .order_by(Purchase.purchase_date.desc())
        )
        rows = self.db.execute(stmt).all()
        return [PurchaseRecord.model_validate(row) for row in rows]
