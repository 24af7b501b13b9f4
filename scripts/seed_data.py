#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with a demo user and a small catalog for
development.

USAGE:
    # From the project root with the virtualenv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Registers the demo user through AuthService
4. Creates sample books through BookService
"""

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookstore.config import get_settings
from bookstore.database import SessionLocal, create_tables
from bookstore.models import Book, Purchase, User
from bookstore.repositories import SqlBookRepository, SqlPurchaseRepository, SqlUserRepository
from bookstore.services import AuthService, BookService, build_payment_gateway

DEMO_USERNAME = "Jane Doe"
DEMO_PASSWORD = "what333i"

BOOKS = [
    {
        "title": "1984",
        "authors": ["George Orwell"],
        "publisher": "Secker & Warburg",
        "published": date(1949, 6, 8),
        "genre": ["Dystopian", "Classic"],
        "summary": "A dystopian novel set in a totalitarian society under constant surveillance.",
        "price": Decimal("12.99"),
    },
    {
        "title": "Pride and Prejudice",
        "authors": ["Jane Austen"],
        "publisher": "T. Egerton",
        "published": date(1813, 1, 28),
        "genre": ["Romance", "Classic"],
        "summary": "Elizabeth Bennet and Mr. Darcy overcome their first impressions.",
        "price": Decimal("9.99"),
    },
    {
        "title": "Things Fall Apart",
        "authors": ["Chinua Achebe"],
        "publisher": "William Heinemann Ltd.",
        "published": date(1958, 6, 17),
        "genre": ["Historical Fiction", "Classic"],
        "summary": "Okonkwo's life in Umuofia and the arrival of colonial rule.",
        "price": Decimal("24.75"),
    },
    {
        "title": "The Hobbit",
        "authors": ["J. R. R. Tolkien"],
        "publisher": "George Allen & Unwin",
        "published": date(1937, 9, 21),
        "genre": ["Fantasy", "Adventure"],
        "summary": "Bilbo Baggins joins a company of dwarves to reclaim their mountain home.",
        "price": Decimal("15.50"),
    },
    {
        "title": "Good Omens",
        "authors": ["Terry Pratchett", "Neil Gaiman"],
        "publisher": "Gollancz",
        "published": date(1990, 5, 1),
        "genre": ["Fantasy", "Comedy"],
        "summary": "An angel and a demon try to stop the apocalypse.",
        "price": Decimal("11.00"),
    },
    {
        "title": "Foundation",
        "authors": ["Isaac Asimov"],
        "publisher": "Gnome Press",
        "published": date(1951, 6, 1),
        "genre": ["Science Fiction"],
        "summary": "Hari Seldon's plan to shorten the coming dark age.",
        "price": Decimal("14.99"),
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Purchase))
    db.execute(delete(Book))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_demo_user(auth: AuthService) -> None:
    print("Creating demo user...")
    auth.create_user(DEMO_USERNAME, DEMO_PASSWORD)
    print(f"  - {DEMO_USERNAME} / {DEMO_PASSWORD}")


def create_books(books: BookService) -> list[Book]:
    print("Creating books...")
    created = []
    for fields in BOOKS:
        book = books.create_book(fields)
        created.append(book)
        print(f"  - {book.title}")
    return created


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()
    gateway = build_payment_gateway(get_settings())

    try:
        if clear_existing:
            clear_data(db)

        create_demo_user(AuthService(SqlUserRepository(db)))
        books = create_books(
            BookService(SqlBookRepository(db), SqlPurchaseRepository(db), gateway)
        )

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print("  - Users: 1")
        print(f"  - Books: {len(books)}")
        print("\nYou can now access the API at http://localhost:8001")
        print("API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        gateway.close()
        db.close()


if __name__ == "__main__":
    seed_database()
