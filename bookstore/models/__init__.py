"""
SQLAlchemy Models Package

Model Relationships:
- User -> Purchase: One-to-Many (a user buys many times)
- Book -> Purchase: One-to-Many (a book is bought many times)

Import all models here so Alembic discovers them through Base.metadata.
"""

from bookstore.models.user import User
from bookstore.models.book import Book
from bookstore.models.purchase import Purchase

__all__ = [
    "User",
    "Book",
    "Purchase",
]
