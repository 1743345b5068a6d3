"""
Books Router

Endpoints:
- POST /books - Register a book (authenticated)
- GET /books - List the caller's own books
- GET /books/all - List every book (authenticated)
- GET /books/search?q= - Search title/author (public)
- GET /books/{book_id} - Book detail with average rating and reviews
- PUT /books/{book_id} - Update a book (creator only)
- DELETE /books/{book_id} - Delete a book and its reviews (creator only)

Ownership and validation rules live in bookreview.services.books; errors
raised there are rendered by the handler registered in main.py.
"""

from collections.abc import Sequence

from fastapi import APIRouter, Query, status

from bookreview.dependencies import CurrentIdentity, DbSession, ReviewPage
from bookreview.models import Book
from bookreview.schemas import (
    BookCreate,
    BookCreatedResponse,
    BookDetailResponse,
    BookListResponse,
    BookResponse,
    BookUpdate,
    ErrorResponse,
    MessageResponse,
    ReviewResponse,
)
from bookreview.services import books, catalog

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        401: {"model": ErrorResponse, "description": "Token missing"},
        403: {"model": ErrorResponse, "description": "Invalid token or not the creator"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)


def _book_list(items: Sequence[Book], message: str) -> BookListResponse:
    return BookListResponse(
        message=message,
        books=[BookResponse.model_validate(book) for book in items],
    )


# =============================================================================
# Collection Endpoints
# =============================================================================
# /all and /search are declared before /{book_id} so they are not parsed
# as book ids.


@router.post(
    "",
    response_model=BookCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a new book",
)
def create_book(
    book_data: BookCreate,
    db: DbSession,
    identity: CurrentIdentity,
) -> BookCreatedResponse:
    """Register a book owned by the caller. Title and author are required."""
    book = books.create_book(
        db,
        title=book_data.title,
        author=book_data.author,
        genre=book_data.genre,
        creator_id=identity.user_id,
    )
    return BookCreatedResponse(book_id=book.id)


@router.get(
    "",
    response_model=BookListResponse,
    summary="List my books",
)
def list_my_books(db: DbSession, identity: CurrentIdentity) -> BookListResponse:
    """Books registered by the caller."""
    return _book_list(
        books.list_books_by_creator(db, identity.user_id),
        "Books fetched successfully",
    )


@router.get(
    "/all",
    response_model=BookListResponse,
    summary="List all books",
)
def list_all_books(db: DbSession, identity: CurrentIdentity) -> BookListResponse:
    """Every registered book, regardless of creator."""
    return _book_list(books.list_all_books(db), "All books fetched successfully")


@router.get(
    "/search",
    response_model=BookListResponse,
    summary="Search books",
    responses={400: {"model": ErrorResponse, "description": "Missing query"}},
)
def search_books(
    db: DbSession,
    q: str | None = Query(
        default=None,
        description="Text to find in title or author (case-insensitive)",
        examples=["dune", "herbert"],
    ),
) -> BookListResponse:
    """
    Public search by partial title or author.

    Examples:
        GET /api/books/search?q=dune
    """
    return _book_list(catalog.search_books(db, q), "Books fetched successfully")


# =============================================================================
# Single Book Endpoints
# =============================================================================


@router.get(
    "/{book_id}",
    response_model=BookDetailResponse,
    response_model_by_alias=True,
    summary="Get book details",
)
def get_book_detail(
    book_id: int,
    db: DbSession,
    identity: CurrentIdentity,
    paging: ReviewPage,
) -> BookDetailResponse:
    """
    A book with its average rating and a page of reviews.

    Query parameters `page` (default 1) and `limit` (default 5) window the
    reviews.
    """
    detail = catalog.get_book_detail(db, book_id, paging.page, paging.limit)
    return BookDetailResponse(
        book=BookResponse.model_validate(detail.book),
        average_rating=detail.average_rating,
        reviews=[ReviewResponse(**review._asdict()) for review in detail.reviews],
    )


@router.put(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Update a book",
    responses={400: {"model": ErrorResponse, "description": "No fields to update"}},
)
def update_book(
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
    identity: CurrentIdentity,
) -> MessageResponse:
    """
    Change title, author or genre. Only the creator may update.

    Omitted or empty fields keep their current value.
    """
    books.update_book(
        db,
        book_id,
        identity.user_id,
        title=book_data.title,
        author=book_data.author,
        genre=book_data.genre,
    )
    return MessageResponse(message="Book updated successfully")


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
)
def delete_book(
    book_id: int,
    db: DbSession,
    identity: CurrentIdentity,
) -> MessageResponse:
    """
    Delete one of the caller's books along with its reviews.

    Someone else's book answers 404, same as a missing one.
    """
    books.delete_book(db, book_id, identity.user_id)
    return MessageResponse(message="Book deleted successfully")
