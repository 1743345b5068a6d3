"""
Domain Exceptions

The error taxonomy shared by every service. Services raise these; the
exception handler registered in main.py turns them into JSON responses of
the form {"detail": <message>, "kind": <kind>}.

Routers never build HTTPExceptions for business rules themselves, so the
same failure always produces the same status code no matter which
endpoint hit it.

Taxonomy:
- ValidationError: malformed or missing input (400)
- AuthenticationError: missing token or bad login (401), invalid token (403)
- AuthorizationError: valid identity, not allowed to touch the resource (403)
- NotFoundError: referenced resource is absent (404)
- DuplicateError: uniqueness violation (409)
"""


class BookReviewError(Exception):
    """
    Base class for all domain errors.

    Attributes:
        kind: Machine-readable error category
        message: Human-readable description
        status_code: HTTP status used by the boundary layer
    """

    kind = "error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationError(BookReviewError):
    """Input is missing or out of range."""

    kind = "validation_error"
    status_code = 400


class AuthenticationError(BookReviewError):
    """
    The caller could not be authenticated: no token, a bad token, or a
    failed username/password check.

    A missing token or a failed login answers 401; an invalid or expired
    token answers 403, so clients can tell "log in" apart from "log in again".
    """

    kind = "authentication_error"

    MISSING = "missing"
    INVALID = "invalid"
    CREDENTIALS = "credentials"

    _messages = {
        MISSING: "Token missing",
        INVALID: "Invalid token",
        CREDENTIALS: "Invalid username or password",
    }

    def __init__(self, reason: str, message: str | None = None) -> None:
        if reason not in self._messages:
            raise ValueError(f"unknown authentication failure reason: {reason}")
        super().__init__(message or self._messages[reason])
        self.reason = reason

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return 403 if self.reason == self.INVALID else 401


class AuthorizationError(BookReviewError):
    """The caller is authenticated but does not own the resource."""

    kind = "authorization_error"
    status_code = 403


class NotFoundError(BookReviewError):
    """The referenced book, review or user does not exist."""

    kind = "not_found"
    status_code = 404


class DuplicateError(BookReviewError):
    """A uniqueness rule was violated (one review per book, unique username)."""

    kind = "duplicate"
    status_code = 409
