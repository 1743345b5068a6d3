#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with demo users, books and reviews for development.

USAGE:
    # From the project root
    python scripts/seed_data.py

Every demo user has the password "password123". Rows are created through
the service layer so the same validation and ownership rules apply.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.orm import Session

from bookreview.database import SessionLocal, create_tables
from bookreview.models import Book, Review, User
from bookreview.services import auth, books, reviews

DEMO_PASSWORD = "password123"

USERS = ["alice", "bob", "carol"]

BOOKS = [
    # (creator, title, author, genre)
    ("alice", "Dune", "Frank Herbert", "Science Fiction"),
    ("alice", "Pride and Prejudice", "Jane Austen", "Romance"),
    ("bob", "1984", "George Orwell", "Dystopian"),
    ("bob", "The Hobbit", "J.R.R. Tolkien", "Fantasy"),
    ("carol", "Foundation", "Isaac Asimov", "Science Fiction"),
]

REVIEWS = [
    # (reviewer, book title, rating, comment)
    ("bob", "Dune", 5, "A desert planet done right."),
    ("carol", "Dune", 4, "Slow start, great payoff."),
    ("alice", "1984", 5, ""),
    ("carol", "The Hobbit", 3, "Fun but light."),
    ("alice", "Foundation", 4, "Big ideas."),
    ("bob", "Foundation", 2, "Too many time skips."),
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.query(Review).delete()
    db.query(Book).delete()
    db.query(User).delete()
    db.commit()
    print("Data cleared.")


def create_users(db: Session) -> dict[str, User]:
    """Create demo users."""
    print("Creating users...")
    users = {name: auth.register_user(db, name, DEMO_PASSWORD) for name in USERS}
    print(f"Created {len(users)} users.")
    return users


def create_books(db: Session, users: dict[str, User]) -> dict[str, Book]:
    """Create demo books, each owned by one of the demo users."""
    print("Creating books...")
    created = {}
    for creator, title, author, genre in BOOKS:
        created[title] = books.create_book(
            db,
            title=title,
            author=author,
            genre=genre,
            creator_id=users[creator].id,
        )
    print(f"Created {len(created)} books.")
    return created


def create_reviews(
    db: Session,
    users: dict[str, User],
    book_map: dict[str, Book],
) -> list[int]:
    """Create demo reviews."""
    print("Creating reviews...")
    review_ids = [
        reviews.add_review(
            db,
            book_map[title].id,
            users[reviewer].id,
            rating=rating,
            comment=comment,
        )
        for reviewer, title, rating, comment in REVIEWS
    ]
    print(f"Created {len(review_ids)} reviews.")
    return review_ids


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        users = create_users(db)
        book_map = create_books(db, users)
        review_ids = create_reviews(db, users, book_map)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Users: {len(users)} (password: {DEMO_PASSWORD})")
        print(f"  - Books: {len(book_map)}")
        print(f"  - Reviews: {len(review_ids)}")
        print("\nAPI documentation at http://localhost:5000/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
