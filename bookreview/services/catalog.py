"""
Catalog Queries

Read-side operations that combine the book store and the review
aggregator: the book detail page and the public search.
"""

from collections.abc import Sequence
from typing import NamedTuple

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from bookreview.exceptions import ValidationError
from bookreview.models.book import Book
from bookreview.services import books, reviews
from bookreview.services.reviews import ReviewWithUsername


class BookDetail(NamedTuple):
    book: Book
    average_rating: float
    reviews: Sequence[ReviewWithUsername]


def get_book_detail(db: Session, book_id: int, page: int, limit: int) -> BookDetail:
    """
    A book with its average rating and one page of reviews.

    Raises:
        NotFoundError: If the book does not exist
        ValidationError: If page or limit is out of range
    """
    book = books.get_book(db, book_id)
    return BookDetail(
        book=book,
        average_rating=reviews.average_rating(db, book_id),
        reviews=reviews.list_reviews(db, book_id, page, limit),
    )


def search_books(db: Session, query: str | None) -> Sequence[Book]:
    """
    Case-insensitive substring search over title and author.

    LIKE wildcards in the query ("%", "_") match literally.

    Raises:
        ValidationError: If query is missing or empty
    """
    if not query:
        raise ValidationError('Search query parameter "q" is required')

    stmt = (
        select(Book)
        .where(
            or_(
                Book.title.icontains(query, autoescape=True),
                Book.author.icontains(query, autoescape=True),
            )
        )
        .order_by(Book.id)
    )
    return db.execute(stmt).scalars().all()
