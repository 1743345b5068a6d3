"""
Review Pydantic Schemas

Schemas:
- ReviewCreate: Post a review for a book
- ReviewUpdate: Change rating and/or comment
- ReviewResponse: A review row with its author's username
- ReviewCreatedResponse: ID of a newly posted review

The 1-5 rating bound is checked by the review service (400), not here.
ReviewUpdate is read with model_dump(exclude_unset=True) so that a field
the client sent, even as an empty string, counts as supplied.
"""

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    """
    Schema for posting a review.

    Example request body:
    {
        "rating": 5,
        "comment": "One of the best books I've ever read"
    }
    """

    rating: int | None = Field(
        default=None,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )
    comment: str | None = Field(
        default=None,
        max_length=5000,
        description="Optional review text",
        examples=["A masterpiece!"],
    )


class ReviewUpdate(BaseModel):
    """Schema for updating a review; only sent fields are changed."""

    rating: int | None = Field(default=None, description="Rating from 1 to 5 stars")
    comment: str | None = Field(default=None, max_length=5000)


class ReviewResponse(BaseModel):
    """A review as shown on a book's detail page."""

    id: int = Field(..., description="Unique review identifier")
    rating: int = Field(..., description="Rating from 1 to 5 stars")
    comment: str = Field(default="", description="Review text")
    username: str = Field(..., description="Author of the review")

    model_config = ConfigDict(from_attributes=True)


class ReviewCreatedResponse(BaseModel):
    """Response for a newly posted review."""

    message: str = Field(default="Review added successfully")
    review_id: int = Field(..., alias="reviewId", description="ID of the new review")

    model_config = ConfigDict(populate_by_name=True)
