"""
Authentication Router

Handles user authentication endpoints:
- Signup (username/password)
- Login (username/password -> JWT access token)
- Get current user (from JWT token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Access tokens expire after ACCESS_TOKEN_EXPIRE_MINUTES (3 hours default)
"""

from fastapi import APIRouter, status

from bookreview.config import get_settings
from bookreview.dependencies import CurrentIdentity, DbSession
from bookreview.schemas.common import ErrorResponse
from bookreview.schemas.user import (
    Credentials,
    SignupResponse,
    TokenResponse,
    UserResponse,
)
from bookreview.services import auth

settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing username or password"},
    },
)


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={409: {"model": ErrorResponse, "description": "Username already taken"}},
)
def signup(credentials: Credentials, db: DbSession) -> SignupResponse:
    """Create an account; the username is stored lowercase."""
    user = auth.register_user(db, credentials.username, credentials.password)
    return SignupResponse(id=user.id, username=user.username)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with username and password",
    responses={401: {"model": ErrorResponse, "description": "Invalid username or password"}},
)
def login(credentials: Credentials, db: DbSession) -> TokenResponse:
    """
    Authenticate and receive a bearer token.

    **Usage:**
    ```
    Authorization: Bearer <token>
    ```
    """
    token = auth.login(db, credentials.username, credentials.password)
    return TokenResponse(
        token=token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
def get_me(identity: CurrentIdentity) -> UserResponse:
    """Return the identity behind the bearer token."""
    return UserResponse(id=identity.user_id, username=identity.username)
