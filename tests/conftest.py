"""
pytest Fixtures for Bookstore API Tests

Shared fixtures used across all test files.

For database tests, we use:
- session scope for engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# ENVIRONMENT=test selects the stub payment gateway; the SQLite URL keeps
# the application engine from needing a PostgreSQL driver.
import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"

from collections.abc import Generator
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore.database import Base, get_db
from bookstore.main import app
from bookstore.models import Book, User
from bookstore.services.security import create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps the suite self-contained. It does not enforce
# foreign keys, so tests never rely on referential integrity.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the connection alive for the entire session.
    Without it, SQLite in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    Entering the client runs the lifespan, which installs the stub
    payment gateway.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# USER FIXTURES
# =============================================================================
@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a registered user for testing."""
    user = User(
        username="Jane Doe",
        hashed_password=hash_password("what333i"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(db_session: Session) -> User:
    user = User(
        username="John Smith",
        hashed_password=hash_password("secret456"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_token(sample_user: User) -> str:
    return create_access_token({"sub": str(sample_user.id)})


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Authorization header for sample_user."""
    return {"Authorization": f"JWT {auth_token}"}


# =============================================================================
# BOOK FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a sample book for testing."""
    book = Book(
        title="1984",
        authors=["George Orwell"],
        publisher="Secker & Warburg",
        published=date(1949, 6, 8),
        genre=["Dystopian", "Classic"],
        summary="A dystopian novel set in a totalitarian society.",
        price=Decimal("12.99"),
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """
    Create 15 books for filtering and pagination tests.

    - genre: even index -> ["Fantasy"], odd index -> ["Science Fiction"]
    - authors: every third book (i % 3 == 0) is by "J. R. R. Tolkien"
    """
    books = []
    for i in range(15):
        book = Book(
            title=f"Test Book {i + 1}",
            authors=["J. R. R. Tolkien"] if i % 3 == 0 else [f"Author {i + 1}"],
            publisher="Test Publisher",
            published=date(2000 + i, 1, 1),
            genre=["Fantasy"] if i % 2 == 0 else ["Science Fiction"],
            price=Decimal(f"{10 + i}.99"),
        )
        books.append(book)
        db_session.add(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books
