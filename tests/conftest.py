"""
pytest Fixtures for Book Review API Tests

Shared fixtures used across all test files.

FIXTURE SCOPES:
- function scope for the engine: every test gets a brand new in-memory
  database, so services are free to commit and roll back
- function scope for sessions and the test client
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookreview.database import Base, get_db
from bookreview.main import app
from bookreview.models import Book, Review, User
from bookreview.services.security import create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps tests fast and needs no external database.
# Services call commit() and rollback() themselves, so instead of wrapping
# each test in an outer transaction the whole database is rebuilt per test.


@pytest.fixture(scope="function")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps a single connection alive; without it the in-memory
    database would disappear between connections.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    The get_db dependency is overridden so requests share the test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# HELPERS
# =============================================================================


def get_auth_header(user: User) -> dict:
    """Create an Authorization header carrying a valid token for user."""
    token = create_access_token({"sub": str(user.id), "username": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_header():
    """Expose get_auth_header to tests as a fixture."""
    return get_auth_header


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


def _make_user(db_session: Session, username: str, password: str) -> User:
    user = User(username=username, hashed_password=hash_password(password))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    return _make_user(db_session, "testuser", "SecurePass123")


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Create a second user for testing ownership scenarios."""
    return _make_user(db_session, "seconduser", "SecurePass456")


@pytest.fixture
def sample_book(db_session: Session, sample_user: User) -> Book:
    """A book registered by sample_user."""
    book = Book(
        title="Dune",
        author="Frank Herbert",
        genre="Science Fiction",
        created_by=sample_user.id,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def sample_review(
    db_session: Session,
    sample_book: Book,
    second_user: User,
) -> Review:
    """A review of sample_book written by second_user."""
    review = Review(
        book_id=sample_book.id,
        user_id=second_user.id,
        rating=4,
        comment="Great world building.",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review
