"""
SQLAlchemy Models Package

Model Relationships:
- User -> Book: One-to-Many (a user creates many books)
- User -> Review: One-to-Many (a user writes many reviews)
- Book -> Review: One-to-Many (a book collects many reviews)

Import all models here so Alembic and create_tables() discover them.
"""

from bookreview.models.user import User
from bookreview.models.book import Book
from bookreview.models.review import Review

__all__ = [
    "User",
    "Book",
    "Review",
]
