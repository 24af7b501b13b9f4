"""
Database Configuration Module

SQLAlchemy 2.0 (synchronous) setup for the Bookstore API.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Repositories run their statements on that session
3. Writes commit immediately
4. Close session when request ends

This is implemented using FastAPI's dependency injection (get_db).
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookstore.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Pool sizing only applies to server databases; SQLite uses its own
# single-connection pools and rejects max_overflow.
engine_options: dict = {
    "pool_pre_ping": True,
    "echo": settings.debug,
}
if settings.is_sqlite:
    engine_options["connect_args"] = {"check_same_thread": False}
else:
    engine_options["pool_size"] = settings.db_pool_size
    engine_options["max_overflow"] = settings.db_max_overflow

engine = create_engine(settings.database_url, **engine_options)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session, yields it to the route (and the repositories the
    route's services are built on), then closes it when the request ends.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Useful for local development and the seed script.
    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)
