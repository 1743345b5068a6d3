"""
Book Store

Creates, lists, updates and deletes books, and enforces that only the
creator of a book may change or remove it.

Update and delete are written as single statements scoped by id AND
creator. A zero row count means the book vanished (or never belonged to
the caller) between the read and the write, and is reported as not found.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from bookreview.exceptions import AuthorizationError, NotFoundError, ValidationError
from bookreview.models.book import Book
from bookreview.models.review import Review

logger = logging.getLogger(__name__)


def get_book(db: Session, book_id: int) -> Book:
    """
    Get a book by ID.

    Raises:
        NotFoundError: If no book has that id
    """
    book = db.get(Book, book_id)
    if book is None:
        raise NotFoundError("Book not found")
    return book


def create_book(
    db: Session,
    title: str | None,
    author: str | None,
    genre: str | None,
    creator_id: int,
) -> Book:
    """
    Register a new book owned by creator_id.

    Args:
        db: Database session
        title: Book title (required, non-empty)
        author: Author name (required, non-empty)
        genre: Optional genre; stored as "" when not given
        creator_id: ID of the authenticated caller

    Returns:
        The persisted Book with its new id

    Raises:
        ValidationError: If title or author is missing or empty
    """
    if not title or not author:
        raise ValidationError("Title and author are required")

    book = Book(title=title, author=author, genre=genre or "", created_by=creator_id)
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Book {book.id} created by user {creator_id}")
    return book


def list_books_by_creator(db: Session, creator_id: int) -> Sequence[Book]:
    """List the books registered by one user."""
    stmt = select(Book).where(Book.created_by == creator_id).order_by(Book.id)
    return db.execute(stmt).scalars().all()


def list_all_books(db: Session) -> Sequence[Book]:
    """List every book."""
    return db.execute(select(Book).order_by(Book.id)).scalars().all()


def update_book(
    db: Session,
    book_id: int,
    requester_id: int,
    title: str | None = None,
    author: str | None = None,
    genre: str | None = None,
) -> Book:
    """
    Change a book's title, author or genre.

    Empty values count as "not supplied" and keep the stored value, so
    {"title": ""} never blanks a title.

    Returns:
        The updated Book

    Raises:
        ValidationError: If none of title, author, genre carries a value
        NotFoundError: If the book does not exist
        AuthorizationError: If requester_id did not create the book
    """
    changes = {
        field: value
        for field, value in (("title", title), ("author", author), ("genre", genre))
        if value
    }
    if not changes:
        raise ValidationError(
            "At least one field (title, author, genre) must be provided for update"
        )

    book = get_book(db, book_id)
    if book.created_by != requester_id:
        logger.warning(f"User {requester_id} tried to update book {book_id}")
        raise AuthorizationError("You are not authorized to update this book")

    stmt = (
        update(Book)
        .where(Book.id == book_id, Book.created_by == requester_id)
        .values(**changes)
    )
    result = db.execute(stmt)
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("Book not found")
    db.commit()
    db.refresh(book)

    logger.info(f"Book {book_id} updated by user {requester_id}: {sorted(changes)}")
    return book


def delete_book(db: Session, book_id: int, requester_id: int) -> None:
    """
    Delete a book owned by requester_id, together with its reviews.

    A missing book and somebody else's book fail identically, so the
    response does not reveal whether the id exists.

    Raises:
        NotFoundError: If no book with that id belongs to requester_id
    """
    result = db.execute(
        delete(Book).where(Book.id == book_id, Book.created_by == requester_id)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("Book not found or not authorized to delete")

    removed = db.execute(delete(Review).where(Review.book_id == book_id)).rowcount
    db.commit()

    logger.info(
        f"Book {book_id} deleted by user {requester_id} ({removed} reviews removed)"
    )
