"""
Book Pydantic Schemas

Request bodies are deliberately loose: title/author presence and the
"at least one field" rule for updates are business rules owned by the book
store, which reports them as 400 validation errors. The schemas only pin
down types and lengths.

Top-level response keys follow the public API's camelCase ("bookId",
"averageRating"); book objects keep the column names.
"""

from pydantic import BaseModel, ConfigDict, Field

from bookreview.schemas.review import ReviewResponse


class BookCreate(BaseModel):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Sci-Fi"
    }
    """

    title: str | None = Field(
        default=None,
        max_length=500,
        description="Book title (required)",
        examples=["Dune"],
    )
    author: str | None = Field(
        default=None,
        max_length=255,
        description="Author name (required)",
        examples=["Frank Herbert"],
    )
    genre: str | None = Field(
        default=None,
        max_length=100,
        description="Optional genre label",
        examples=["Sci-Fi"],
    )


class BookUpdate(BaseModel):
    """
    Schema for updating a book.

    Omitted or empty fields keep their current value; at least one field
    must carry a value.
    """

    title: str | None = Field(default=None, max_length=500)
    author: str | None = Field(default=None, max_length=255)
    genre: str | None = Field(default=None, max_length=100)


class BookResponse(BaseModel):
    """A book as stored."""

    id: int = Field(..., description="Unique book identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Author name")
    genre: str = Field(default="", description="Genre label")
    created_by: int = Field(..., description="ID of the user who registered the book")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Sci-Fi",
                "created_by": 7,
            }
        },
    )


class BookCreatedResponse(BaseModel):
    """Response for a newly created book."""

    message: str = Field(default="Book added successfully")
    book_id: int = Field(..., alias="bookId", description="ID of the new book")

    model_config = ConfigDict(populate_by_name=True)


class BookListResponse(BaseModel):
    """A list of books with a status message."""

    message: str = Field(default="Books fetched successfully")
    books: list[BookResponse] = Field(default_factory=list)


class BookDetailResponse(BaseModel):
    """
    A book with its average rating and one page of reviews.

    averageRating is 0 when the book has no reviews.
    """

    book: BookResponse
    average_rating: float = Field(
        ...,
        alias="averageRating",
        ge=0,
        le=5,
        description="Mean rating rounded to two decimals",
    )
    reviews: list[ReviewResponse] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "book": {
                    "id": 1,
                    "title": "Dune",
                    "author": "Frank Herbert",
                    "genre": "Sci-Fi",
                    "created_by": 7,
                },
                "averageRating": 4.5,
                "reviews": [
                    {"id": 3, "rating": 5, "comment": "A classic", "username": "reader"},
                ],
            }
        },
    )
