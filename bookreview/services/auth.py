"""
Identity Service

Registers accounts, logs them in, and turns a bearer token back into the
caller's identity.

The rest of the application only depends on authenticate(): it receives a
raw token (or None) and either returns an Identity or raises
AuthenticationError with reason "missing" or "invalid".
"""

import logging
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookreview.exceptions import AuthenticationError, DuplicateError, ValidationError
from bookreview.models.user import User
from bookreview.services.security import (
    create_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)

logger = logging.getLogger(__name__)


class Identity(NamedTuple):
    """The authenticated caller as seen by the book and review services."""

    user_id: int
    username: str


def _normalize_username(username: str | None) -> str:
    return (username or "").strip().lower()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Look up a user by (normalized) username."""
    stmt = select(User).where(User.username == _normalize_username(username))
    return db.execute(stmt).scalar_one_or_none()


def register_user(db: Session, username: str | None, password: str | None) -> User:
    """
    Create a new account.

    Args:
        db: Database session
        username: Desired username (stored lowercase)
        password: Plain text password, hashed before storage

    Returns:
        The created User

    Raises:
        ValidationError: If username or password is missing
        DuplicateError: If the username is already taken
    """
    normalized = _normalize_username(username)
    if not normalized or not password:
        raise ValidationError("Username and password are required")

    if get_user_by_username(db, normalized) is not None:
        raise DuplicateError("User already exists")

    user = User(username=normalized, hashed_password=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another signup for the same name won the race
        db.rollback()
        raise DuplicateError("User already exists") from None
    db.refresh(user)

    logger.info(f"New user registered: {user.username}")
    return user


def login(db: Session, username: str | None, password: str | None) -> str:
    """
    Check credentials and issue an access token.

    Unknown users and wrong passwords fail the same way so the response
    does not reveal which usernames exist.

    Returns:
        Encoded JWT access token

    Raises:
        ValidationError: If username or password is missing
        AuthenticationError: "credentials" (401) if the username or
            password does not match
    """
    if not username or not password:
        raise ValidationError("Username and password are required")

    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed for {_normalize_username(username)}")
        raise AuthenticationError(AuthenticationError.CREDENTIALS)

    logger.info(f"User logged in: {user.username}")
    return create_access_token({"sub": str(user.id), "username": user.username})


def authenticate(db: Session, token: str | None) -> Identity:
    """
    Resolve a bearer token to the caller's identity.

    Args:
        db: Database session
        token: Raw bearer token, or None when the header was absent

    Returns:
        Identity of the token's user

    Raises:
        AuthenticationError: "missing" when no token was sent, "invalid"
            when it fails verification or its user no longer exists
    """
    if not token:
        raise AuthenticationError(AuthenticationError.MISSING)

    payload = verify_access_token(token)
    if payload is None:
        raise AuthenticationError(AuthenticationError.INVALID)

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise AuthenticationError(AuthenticationError.INVALID) from None

    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError(AuthenticationError.INVALID)

    return Identity(user_id=user.id, username=user.username)
