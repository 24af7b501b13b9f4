"""
Repositories Package

Each repository is an abstract interface plus one SQLAlchemy implementation
bound to the request's Session. Services depend on the interfaces only, so
tests can hand them in-memory fakes.

- users.py: UserRepository / SqlUserRepository
- books.py: BookRepository / SqlBookRepository
- purchases.py: PurchaseRepository / SqlPurchaseRepository

Reads return the model or None; they never raise for a missing row.
"""

from bookstore.repositories.books import BookRepository, SqlBookRepository
from bookstore.repositories.purchases import PurchaseRepository, SqlPurchaseRepository
from bookstore.repositories.users import SqlUserRepository, UserRepository

__all__ = [
    "BookRepository",
    "SqlBookRepository",
    "PurchaseRepository",
    "SqlPurchaseRepository",
    "UserRepository",
    "SqlUserRepository",
]
