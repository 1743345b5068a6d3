"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Book Review API.

The default store is a SQLite file next to the process; set DATABASE_URL to
a PostgreSQL URL (with the `postgres` extra installed) for deployments.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Services use that session for every statement in the request
3. Services commit on success, roll back on failure
4. Session is closed when the request ends

Services never reach for a module-level session; they receive the session
as their first argument, which is what lets tests hand them an in-memory
database instead.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookreview.config import get_settings

settings = get_settings()


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Build create_engine() keyword arguments for a database URL.

    SQLite connections are shared with FastAPI's threadpool, so the
    same-thread check is disabled. Pool sizing only applies to server
    databases; SQLite's pool classes reject those arguments.
    """
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }


# =============================================================================
# Database Engine
# =============================================================================
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # Log SQL in debug mode
    **engine_options(settings.database_url),
)


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

    Creates a new session, yields it to the route handler and closes it
    when the request ends (the finally block runs even on errors).

    Usage in Routes:
        @router.get("/books")
        def list_books(db: DbSession):
            return books.list_all_books(db)

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
    Create all database tables that do not exist yet.

    Used at startup for development databases. In production, run
    `alembic upgrade head` instead.
    """
    # Register every model on Base.metadata before creating tables
    import bookreview.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only for resetting development databases.
    """
    import bookreview.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
