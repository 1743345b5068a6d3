"""
User Model

Represents a registered account. The core only ever sees a user's id and
username; the password hash stays inside the identity services.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookreview.database import Base

if TYPE_CHECKING:
    from bookreview.models.book import Book
    from bookreview.models.review import Review


class User(Base):
    """
    User model representing registered users.

    Table: users

    Indexes:
    - Primary key on id (automatic)
    - username: Unique index for login lookups

    Example:
        user = User(
            username="reader",
            hashed_password=hash_password("SecurePass123"),
        )
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique username, lowercase, immutable after signup"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the user registered"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="creator",
    )

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="user",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
