"""
User Model

Registered users. Created on registration, read on login and token
validation; never updated or deleted.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.database import Base

if TYPE_CHECKING:
    from bookstore.models.purchase import Purchase


class User(Base):
    """
    User model.

    Table: users

    Indexes:
    - Primary key on id (UUID)
    - username: Unique index for login lookups
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Login name, unique across users"
    )

    # bcrypt hash, never the plain password
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    purchases: Mapped[list["Purchase"]] = relationship(
        "Purchase",
        back_populates="user",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
