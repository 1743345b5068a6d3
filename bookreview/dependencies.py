"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

Common Dependency Patterns:
- Database sessions (per-request)
- Authentication (resolve the bearer token to an Identity)
- Pagination parameters for review listings
"""

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from bookreview.config import get_settings
from bookreview.database import get_db
from bookreview.exceptions import AuthenticationError
from bookreview.services.auth import Identity, authenticate

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
# routes write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Review Pagination
# =============================================================================
class ReviewPageParams:
    """
    Page window for a book's reviews.

    Range checks live in the review service so that an out-of-range page
    is reported like every other validation failure.

    Usage in route:
        @router.get("/{book_id}")
        def get_book(book_id: int, db: DbSession, paging: ReviewPage):
            catalog.get_book_detail(db, book_id, paging.page, paging.limit)
    """

    def __init__(
        self,
        page: int = Query(
            default=settings.default_page,
            description="Review page number (1-indexed)",
            examples=[1, 2],
        ),
        limit: int = Query(
            default=settings.default_page_size,
            description=f"Reviews per page (max {settings.max_page_size})",
            examples=[5, 10],
        ),
    ) -> None:
        self.page = page
        self.limit = limit


ReviewPage = Annotated[ReviewPageParams, Depends()]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
# The raw header is read so that a present but non-Bearer value can be
# rejected as invalid (403) instead of being reported as missing (401).
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer <token>",
)


def bearer_token(header: str | None) -> str | None:
    """
    Extract the token from an Authorization header value.

    Returns:
        The token, or None when the header is absent or carries no token

    Raises:
        AuthenticationError: "invalid" if the header uses another scheme
            or has extra parts
    """
    parts = (header or "").split()
    if len(parts) < 2:
        if parts and parts[0].lower() != "bearer":
            raise AuthenticationError(AuthenticationError.INVALID)
        return None
    if len(parts) > 2 or parts[0].lower() != "bearer":
        raise AuthenticationError(AuthenticationError.INVALID)
    return parts[1]


def get_current_identity(
    db: DbSession,
    header: str | None = Depends(authorization_header),
) -> Identity:
    """
    Resolve the Authorization header to the caller's identity.

    Raises:
        AuthenticationError: 401 if the token is missing, 403 if invalid
    """
    return authenticate(db, bearer_token(header))


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
