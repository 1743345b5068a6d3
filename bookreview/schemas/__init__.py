"""
Pydantic Schemas Package

Pydantic models for request/response validation, kept separate from the
SQLAlchemy models so the API shape can differ from the table layout.

Schema Naming Convention:
- XxxCreate: Fields accepted when creating a record
- XxxUpdate: Fields allowed when updating (all optional)
- XxxResponse: Fields returned in API responses
"""

from bookreview.schemas.book import (
    BookCreate,
    BookCreatedResponse,
    BookDetailResponse,
    BookListResponse,
    BookResponse,
    BookUpdate,
)
from bookreview.schemas.common import ErrorResponse, MessageResponse
from bookreview.schemas.review import (
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewResponse,
    ReviewUpdate,
)
from bookreview.schemas.user import (
    Credentials,
    SignupResponse,
    TokenResponse,
    UserResponse,
)

__all__ = [
    # Book schemas
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookCreatedResponse",
    "BookListResponse",
    "BookDetailResponse",
    # Review schemas
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewCreatedResponse",
    # User schemas
    "Credentials",
    "UserResponse",
    "SignupResponse",
    "TokenResponse",
    # Shared
    "MessageResponse",
    "ErrorResponse",
]
