"""
Reviews Router

Endpoints:
- POST /books/{book_id}/reviews - Post a review (authenticated)
- PUT /reviews/{review_id} - Update a review (author only)
- DELETE /reviews/{review_id} - Delete a review (author only)

Business Rules:
- One review per user per book (enforced by database constraint)
- Rating must be 1-5
- Only the review author can update or delete their review
"""

from fastapi import APIRouter, status

from bookreview.dependencies import CurrentIdentity, DbSession
from bookreview.schemas import (
    ErrorResponse,
    MessageResponse,
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewUpdate,
)
from bookreview.services import reviews

router = APIRouter(
    tags=["Reviews"],
    responses={
        400: {"model": ErrorResponse, "description": "Rating out of range"},
        401: {"model": ErrorResponse, "description": "Token missing"},
        403: {"model": ErrorResponse, "description": "Invalid token or not the author"},
        404: {"model": ErrorResponse, "description": "Review or book not found"},
    },
)


@router.post(
    "/books/{book_id}/reviews",
    response_model=ReviewCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a review",
    responses={409: {"model": ErrorResponse, "description": "Already reviewed"}},
)
def create_review(
    book_id: int,
    review_data: ReviewCreate,
    db: DbSession,
    identity: CurrentIdentity,
) -> ReviewCreatedResponse:
    """Post the caller's review of a book. One review per book per user."""
    review_id = reviews.add_review(
        db,
        book_id,
        identity.user_id,
        rating=review_data.rating,
        comment=review_data.comment,
    )
    return ReviewCreatedResponse(review_id=review_id)


@router.put(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Update a review",
)
def update_review(
    review_id: int,
    review_data: ReviewUpdate,
    db: DbSession,
    identity: CurrentIdentity,
) -> MessageResponse:
    """
    Update your own review.

    Only fields present in the body change; an explicit empty comment
    clears the comment.
    """
    reviews.update_review(
        db,
        review_id,
        identity.user_id,
        review_data.model_dump(exclude_unset=True),
    )
    return MessageResponse(message="Review updated successfully")


@router.delete(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Delete a review",
)
def delete_review(
    review_id: int,
    db: DbSession,
    identity: CurrentIdentity,
) -> MessageResponse:
    """Delete your own review."""
    reviews.delete_review(db, review_id, identity.user_id)
    return MessageResponse(message="Review deleted successfully")
