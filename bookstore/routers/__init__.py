"""
API Routers Package

Router Structure:
- users.py: /api/v1/user/* endpoints (registration, login)
- books.py: /api/v1/books/* endpoints (catalog, purchases)

Each router is imported and registered in main.py.
"""

from bookstore.routers.books import router as books_router
from bookstore.routers.users import router as users_router

__all__ = [
    "books_router",
    "users_router",
]
