"""User persistence."""

import uuid
from abc import ABC, abstractmethod

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from bookstore.models import User


class UserRepository(ABC):
    """Storage contract for users."""

    @abstractmethod
    def create_user(self, username: str, hashed_password: str) -> User:
        """Insert a user whose password is already hashed."""
        ...

    @abstractmethod
    def get_user(self, id_or_username: str | uuid.UUID) -> User | None:
        """Find a user by UUID id or by username in a single lookup."""
        ...


class SqlUserRepository(UserRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def create_user(self, username: str, hashed_password: str) -> User:
        user = User(username=username, hashed_password=hashed_password)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_user(self, id_or_username: str | uuid.UUID) -> User | None:
        value = str(id_or_username)
        conditions = [User.username == value]

        # Only compare against the id column when the value parses as a UUID
        try:
            conditions.append(User.id == uuid.UUID(value))
        except ValueError:
            pass

        stmt = select(User).where(or_(*conditions))
        return self.db.execute(stmt).scalars().first()
