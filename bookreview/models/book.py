"""
Book Model

A book registered by a user. The creator is fixed at insert time and is
the only account allowed to change or remove the row.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookreview.database import Base

if TYPE_CHECKING:
    from bookreview.models.review import Review
    from bookreview.models.user import User


class Book(Base):
    """
    Book model representing books registered by users.

    Table: books

    Fields:
    - title: Book title (required)
    - author: Author name as free text (required)
    - genre: Optional genre label, empty string when not given
    - created_by: ID of the user who registered the book

    Example:
        book = Book(title="Dune", author="Frank Herbert", genre="Sci-Fi", created_by=1)
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author name"
    )

    genre: Mapped[str] = mapped_column(
        String(100),
        default="",
        nullable=False,
        comment="Genre label, empty when not given"
    )

    # Set once at creation; ownership checks compare against it
    created_by: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        index=True,
        nullable=False,
        comment="User who registered the book"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    creator: Mapped["User"] = relationship("User", back_populates="books")

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', created_by={self.created_by})"
