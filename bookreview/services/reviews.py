"""
Review Aggregator

Owns review records and the numbers derived from them.

Business Rules:
- Rating is an integer from 1 to 5
- One review per user per book; the database's unique constraint is the
  final word, the pre-check only avoids a failed insert in the common case
- Only the author of a review may update or delete it
- Updates use presence semantics: any supplied field is written, including
  an empty comment

The average rating is computed on demand with AVG() rather than stored on
the book, so it can never drift from the review rows.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookreview.config import get_settings
from bookreview.exceptions import (
    AuthorizationError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from bookreview.models.book import Book
from bookreview.models.review import REVIEW_UNIQUE_CONSTRAINT, Review
from bookreview.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

MIN_RATING = 1
MAX_RATING = 5

UPDATABLE_FIELDS = frozenset({"rating", "comment"})


class ReviewWithUsername(NamedTuple):
    """A review row joined with its author's username."""

    id: int
    rating: int
    comment: str
    username: str


# =============================================================================
# Helper Functions
# =============================================================================
def validate_rating(rating: Any) -> int:
    """
    Check that rating is an integer from 1 to 5.

    Booleans are rejected even though Python treats them as integers.

    Raises:
        ValidationError: If the rating is missing, not an integer, or out of range
    """
    if (
        isinstance(rating, bool)
        or not isinstance(rating, int)
        or not MIN_RATING <= rating <= MAX_RATING
    ):
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        )
    return rating


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a unique-constraint failure apart from other integrity errors."""
    message = str(exc.orig).lower()
    return REVIEW_UNIQUE_CONSTRAINT in message or "unique" in message


def get_review(db: Session, review_id: int) -> Review:
    """
    Get a review by ID.

    Raises:
        NotFoundError: If no review has that id
    """
    review = db.get(Review, review_id)
    if review is None:
        raise NotFoundError("Review not found")
    return review


def find_user_review(db: Session, book_id: int, user_id: int) -> Review | None:
    """Return the review user_id wrote for book_id, if any."""
    stmt = select(Review).where(Review.book_id == book_id, Review.user_id == user_id)
    return db.execute(stmt).scalar_one_or_none()


# =============================================================================
# Mutations
# =============================================================================
def add_review(
    db: Session,
    book_id: int,
    user_id: int,
    rating: Any,
    comment: str | None = None,
) -> int:
    """
    Post user_id's review of book_id.

    Args:
        db: Database session
        book_id: Book being reviewed
        user_id: Authenticated reviewer
        rating: Integer from 1 to 5
        comment: Optional text; stored as "" when not given

    Returns:
        ID of the new review

    Raises:
        ValidationError: If the rating is out of range
        NotFoundError: If the book does not exist
        DuplicateError: If the user already reviewed this book
    """
    validate_rating(rating)

    if db.get(Book, book_id) is None:
        raise NotFoundError("Book not found")

    if find_user_review(db, book_id, user_id) is not None:
        raise DuplicateError("You have already reviewed this book")

    review = Review(book_id=book_id, user_id=user_id, rating=rating, comment=comment or "")
    db.add(review)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            logger.warning(
                f"Concurrent duplicate review for book {book_id} by user {user_id}"
            )
            raise DuplicateError("You have already reviewed this book") from None
        raise
    db.refresh(review)

    logger.info(f"Review {review.id} added to book {book_id} by user {user_id}")
    return review.id


def update_review(
    db: Session,
    review_id: int,
    requester_id: int,
    changes: Mapping[str, Any],
) -> Review:
    """
    Update the rating and/or comment of a review.

    Args:
        db: Database session
        review_id: Review to change
        requester_id: Authenticated caller
        changes: Only the fields the caller supplied ("rating", "comment");
            absent keys keep their stored value

    Returns:
        The updated Review

    Raises:
        ValidationError: If a supplied rating is out of range
        NotFoundError: If the review does not exist
        AuthorizationError: If requester_id is not the review's author
    """
    values = {field: changes[field] for field in UPDATABLE_FIELDS if field in changes}
    if "rating" in values:
        validate_rating(values["rating"])
    if "comment" in values and values["comment"] is None:
        values["comment"] = ""

    review = get_review(db, review_id)
    if review.user_id != requester_id:
        logger.warning(f"User {requester_id} tried to update review {review_id}")
        raise AuthorizationError("You can only update your own reviews")

    if values:
        result = db.execute(
            update(Review)
            .where(Review.id == review_id, Review.user_id == requester_id)
            .values(**values)
        )
        if result.rowcount == 0:
            db.rollback()
            raise NotFoundError("Review not found")
        db.commit()
        db.refresh(review)

    logger.info(f"Review {review_id} updated by user {requester_id}")
    return review


def delete_review(db: Session, review_id: int, requester_id: int) -> None:
    """
    Delete a review written by requester_id.

    Unlike book deletion, a missing review and somebody else's review fail
    differently.

    Raises:
        NotFoundError: If the review does not exist
        AuthorizationError: If requester_id is not the review's author
    """
    review = get_review(db, review_id)
    if review.user_id != requester_id:
        logger.warning(f"User {requester_id} tried to delete review {review_id}")
        raise AuthorizationError("You can only delete your own reviews")

    result = db.execute(
        delete(Review).where(Review.id == review_id, Review.user_id == requester_id)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("Review not found")
    db.commit()

    logger.info(f"Review {review_id} deleted by user {requester_id}")


# =============================================================================
# Aggregation
# =============================================================================
def average_rating(db: Session, book_id: int) -> float:
    """
    Mean rating of a book's reviews, rounded to two decimals.

    Returns:
        The average, or 0 when the book has no reviews
    """
    avg = db.execute(
        select(func.avg(Review.rating)).where(Review.book_id == book_id)
    ).scalar()
    if avg is None:
        return 0
    return round(float(avg), 2)


def list_reviews(
    db: Session,
    book_id: int,
    page: int,
    limit: int,
) -> Sequence[ReviewWithUsername]:
    """
    One page of a book's reviews with each author's username.

    Pages are 1-based: page 1 starts at offset 0, page 2 at offset limit.
    Rows are ordered by review id.

    Raises:
        ValidationError: If page < 1, limit < 1 or limit exceeds max_page_size
    """
    if page < 1:
        raise ValidationError("Page must be 1 or greater")
    if limit < 1 or limit > settings.max_page_size:
        raise ValidationError(f"Limit must be between 1 and {settings.max_page_size}")

    offset = (page - 1) * limit
    stmt = (
        select(Review.id, Review.rating, Review.comment, User.username)
        .join(User, Review.user_id == User.id)
        .where(Review.book_id == book_id)
        .order_by(Review.id)
        .limit(limit)
        .offset(offset)
    )
    return [ReviewWithUsername(*row) for row in db.execute(stmt).all()]
